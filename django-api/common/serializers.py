def first_error(errors) -> str:
    """Flatten DRF serializer errors into one user-facing message."""
    if isinstance(errors, dict):
        for field_name, value in errors.items():
            message = first_error(value)
            return f"{field_name}: {message}" if field_name != "non_field_errors" else message
    if isinstance(errors, list):
        for value in errors:
            if value:
                return first_error(value)
    return str(errors)
