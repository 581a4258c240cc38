from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Tuple, Union

from utils.exceptions import ValidationException
from utils.validation.validators import validate_name, validate_non_negative_int


@dataclass(frozen=True)
class SalesLedger:
    """
    Quantities sold per product name for the current period.

    Entries keep the order they were recorded in; that order is the tie-break
    whenever entries are ranked by quantity.
    """

    entries: Tuple[Tuple[str, int], ...] = ()

    def __post_init__(self) -> None:
        seen = set()
        cleaned = []
        for name, quantity in self.entries:
            name = validate_name(name)
            if name in seen:
                raise ValidationException(f"Duplicate ledger entry for '{name}'")
            seen.add(name)
            cleaned.append((name, validate_non_negative_int(quantity, f"Quantity sold for '{name}'")))
        object.__setattr__(self, "entries", tuple(cleaned))
        object.__setattr__(self, "_quantities", dict(cleaned))

    @classmethod
    def from_mapping(cls, sales: Union["SalesLedger", Mapping[str, int], None]) -> "SalesLedger":
        if isinstance(sales, SalesLedger):
            return sales
        if sales is None:
            return cls()
        if not isinstance(sales, Mapping):
            raise ValidationException("Sales must be a mapping of product name to quantity")
        return cls(tuple(sales.items()))

    def quantity_for(self, name: str, default: int = 0) -> int:
        return self._quantities.get(name, default)

    def items(self) -> Tuple[Tuple[str, int], ...]:
        return self.entries

    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.entries)

    def total_units(self) -> int:
        return sum(quantity for _, quantity in self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self._quantities

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self.entries)
