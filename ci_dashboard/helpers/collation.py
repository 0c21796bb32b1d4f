import locale


def label_sort_key(label: str):
    """
    Ascending key for user facing labels: case-insensitive first ("alpha" before
    "Zeta"), then case-sensitive so that equal-but-for-case labels keep a stable
    order. Both levels go through the `LC_COLLATE` collation.
    """
    return (locale.strxfrm(label.casefold()), locale.strxfrm(label))
