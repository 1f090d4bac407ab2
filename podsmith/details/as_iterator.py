from typing import Hashable, Iterable, Iterator, List, Set, Tuple, TypeVar, Union

T = TypeVar("T", bound=Hashable)


# Make scalar string or container of strings iterable...
def str_iter(strings: Union[str, List[str], Set[str], Tuple[str]]) -> Iterator[str]:
    if isinstance(strings, (list, set, tuple)):
        for v in strings:
            if not isinstance(v, str):
                raise TypeError(f"expected str, got {type(v).__name__}: {v!r}")
            yield v
    elif isinstance(strings, str):
        yield strings
    else:
        raise TypeError(f"expected str or collection, got {type(strings).__name__}")


# Drop repeated items, first occurrence wins...
def unique(items: Iterable[T]) -> List[T]:
    seen: set = set()

    def visit(x):
        if x not in seen:
            seen.add(x)
            return True
        return False

    return [x for x in items if visit(x)]
