'''Read-only, case-insensitive multimap for response headers.'''

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, list[str]]):
    '''
    Header name -> ordered list of values. Duplicate header lines are kept in
    arrival order. Names compare case-insensitively; iteration yields each name
    once, spelled as it was first seen.
    '''

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._names: dict[str, str] = {}
        self._values: dict[str, list[str]] = {}
        for name, value in pairs:
            key = name.lower()
            if key not in self._names:
                self._names[key] = name
                self._values[key] = []
            self._values[key].append(value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> 'Headers':
        return cls(pairs)

    def __getitem__(self, name: str) -> list[str]:
        # Copy so callers cannot mutate the stored sequence
        return list(self._values[name.lower()])

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f'Headers({dict(self.items())!r})'

    def get_first(self, name: str, default: str | None = None) -> str | None:
        '''First value for name, or default when the header is absent.'''
        values = self._values.get(name.lower())
        return values[0] if values else default
