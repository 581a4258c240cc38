import re

def sanitize_filename(value: str) -> str:
    """
    Remove characters that are not allowed in filenames.

    Args:
        value (str): The filename to sanitize.

    Returns:
        str: The sanitized filename.
    """
    return re.sub(r'[<>:"/\\|?*]', '', value)

def sanitize_sheet_name(value: str) -> str:
    """
    Make a string usable as an Excel worksheet name.

    Excel forbids ``[]:*?/\\`` and limits names to 31 characters.
    """
    cleaned = re.sub(r'[\[\]:*?/\\]', '', value).strip() or "Sheet"
    return cleaned[:31]
