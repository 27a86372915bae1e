"""Core domain logic: debouncing, AI error detection, exceptions."""
