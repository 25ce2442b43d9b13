"""Map human-entered product names onto endoflife.date slugs."""


def map_product(raw_name: str) -> str:
    """
    Convert a product name to the API slug format.

    Lowercases the name and replaces each space with a hyphen. Nothing else is
    touched, so already-valid slugs such as ``apple-watch`` pass through.

    Args:
        raw_name: Product name as given in the input file

    Returns:
        API slug (e.g., "Red Hat" -> "red-hat")
    """
    return raw_name.lower().replace(" ", "-")
