"""Domain types: criteria specs, request data and cache exceptions. No I/O."""
