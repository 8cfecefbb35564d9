from app.exceptions.exceptions import MissingFieldException


def require_present(**fields) -> None:
    """Raise MissingFieldException naming every field that is None or empty."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingFieldException(*missing)
