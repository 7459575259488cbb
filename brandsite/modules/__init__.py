"""Brand Site feature modules."""
