"""Pure domain layer: filing addresses, access capabilities, exceptions."""
