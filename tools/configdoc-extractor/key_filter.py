import logging

logger = logging.getLogger(__name__)


def is_config_key(field_element, host):
    """
    Check if a field declaration defines a configuration key.

    Returns True only for fields that:
    - are not excluded through their ConfigDoc annotation (exclude=True), and
    - hold a compile-time constant value of type str.

    An annotation alone never makes a field a configuration key; the literal
    string constant does. An empty string constant is still accepted.
    """
    annotation = host.annotation_of(field_element)
    if annotation is not None and annotation.exclude:
        logger.debug(f"Skipping excluded field '{field_element.name}'")
        return False

    value = host.constant_value_of(field_element)
    if not isinstance(value, str):
        logger.debug(
            f"Skipping field '{field_element.name}' without a string constant (got {type(value).__name__})"
        )
        return False

    return True
