from string import ascii_lowercase

_ONE = len(ascii_lowercase)  # a..z
_TWO = _ONE + _ONE**2  # aa..zz


def node_label(index: int) -> str:
    """a..z, then aa..zz, then aaa.. for anything past 701."""
    if index < 0:
        raise ValueError(f"label index must be >= 0, got {index}")
    if index < _ONE:
        return ascii_lowercase[index]
    if index < _TWO:
        first, second = divmod(index - _ONE, _ONE)
        return ascii_lowercase[first] + ascii_lowercase[second]
    first, rest = divmod(index - _TWO, _ONE**2)
    second, third = divmod(rest, _ONE)
    # three letters at most; the leading letter wraps past zzz
    return ascii_lowercase[first % _ONE] + ascii_lowercase[second] + ascii_lowercase[third]
