def ok(**data):
    """Standard success envelope: {"success": true, ...data}."""
    return {"success": True, **data}


def error(message: str = "An internal error occurred"):
    """Standard error envelope: {"success": false, "error": message}."""
    return {"success": False, "error": message}
