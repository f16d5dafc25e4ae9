"""Pure domain records for the point-of-sale core: no I/O, no frameworks."""
