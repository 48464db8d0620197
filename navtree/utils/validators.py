"""Input validation utilities"""


def validate_menu_data(data, partial=False):
    """
    Validate menu creation/update data.

    Args:
        data (dict): Menu data from request
        partial (bool): Only check keys that are present (update)

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(data, dict):
        return False, "Menu data must be an object"

    if not partial or 'name' in data:
        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            return False, "Name is required"
        if len(name.strip()) > 100:
            return False, "Name must be 100 characters or less"

    location = data.get('location')
    if location is not None:
        if not isinstance(location, str):
            return False, "Location must be a string"
        if len(location) > 50:
            return False, "Location must be 50 characters or less"

    return True, None


def validate_item_data(data):
    """
    Validate menu item creation/update data.
    URL/page presence is checked later by the URL resolver.

    Args:
        data (dict): Item data from request

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(data, dict):
        return False, "Menu item data must be an object"

    title = data.get('title')
    if not isinstance(title, str) or not title.strip():
        return False, "Title is required"

    if len(title) > 200:
        return False, "Title must be 200 characters or less"

    for field, limit in (('url', 500), ('target', 20), ('icon', 100)):
        value = data.get(field)
        if value is None:
            continue
        if not isinstance(value, str):
            return False, f"{field.capitalize()} must be a string"
        if len(value) > limit:
            return False, f"{field.capitalize()} must be {limit} characters or less"

    return True, None


def validate_order_value(order):
    """Orders are plain integers (bool is rejected even though it subclasses int)"""
    return isinstance(order, int) and not isinstance(order, bool)


def validate_order_updates(updates):
    """
    Validate a bulk reorder payload.

    Args:
        updates (list): [{'id': ..., 'order': int, 'parent_id'?: ...}]

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(updates, list):
        return False, "Items must be a list"

    for idx, entry in enumerate(updates):
        if not isinstance(entry, dict):
            return False, f"Entry {idx} must be an object"
        if not entry.get('id'):
            return False, f"Entry {idx} is missing an id"
        if not validate_order_value(entry.get('order')):
            return False, f"Entry {idx} has an invalid order"
        parent_id = entry.get('parent_id')
        if parent_id is not None and not isinstance(parent_id, str):
            return False, f"Entry {idx} has an invalid parent_id"

    return True, None


def validate_style_choices(data, choices):
    """
    Check enum-like style fields against their allowed values.

    Args:
        data (dict): Style input
        choices (dict): field name -> allowed values

    Returns:
        tuple: (is_valid, error_message)
    """
    for field, allowed in choices.items():
        value = data.get(field)
        if value is not None and value not in allowed:
            return False, f"Invalid {field}: {value!r} (expected one of {', '.join(allowed)})"
    return True, None


def validate_style_types(data, fields, boolean_fields=(), integer_fields=(), json_fields=()):
    """
    Check style values against their column types. None clears a field.

    Args:
        data (dict): Style input
        fields (iterable): Editable field names
        boolean_fields (iterable): Fields that must be bool
        integer_fields (iterable): Fields that must be int (bool rejected)
        json_fields (iterable): Fields checked separately as JSON payloads

    Returns:
        tuple: (is_valid, error_message)
    """
    for field in fields:
        value = data.get(field)
        if value is None or field in json_fields:
            continue
        if field in boolean_fields:
            if not isinstance(value, bool):
                return False, f"{field} must be true or false"
        elif field in integer_fields:
            if not validate_order_value(value):
                return False, f"{field} must be an integer"
        elif not isinstance(value, str):
            return False, f"{field} must be a string"
    return True, None


def validate_json_structure(data, max_depth=10, current_depth=0):
    """
    Validate JSON structure to prevent deeply nested objects (DoS attack).

    Args:
        data: JSON data to validate
        max_depth (int): Maximum nesting depth allowed
        current_depth (int): Current recursion depth

    Returns:
        bool: True if valid depth
    """
    if current_depth > max_depth:
        return False

    if isinstance(data, dict):
        for value in data.values():
            if not validate_json_structure(value, max_depth, current_depth + 1):
                return False
    elif isinstance(data, list):
        for item in data:
            if not validate_json_structure(item, max_depth, current_depth + 1):
                return False

    return True
