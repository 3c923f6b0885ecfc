"""
Cart Domain Errors

Raised while turning a shopper's selection into a cart line. They are
reported back to the shopper, never corrected silently.
"""

from datetime import date
from typing import Dict, List


class SelectionError(ValueError):
    """Base class for rejected cart selections"""

    field = 'non_field_errors'

    def as_errors(self) -> Dict[str, List[str]]:
        """Per-field messages in the shape DRF validation errors use"""
        return {self.field: [str(self)]}


class InvalidRangeError(SelectionError):
    """The rental end date is not strictly after the start date"""

    field = 'end_date'

    def __init__(self, message: str = "La date de fin doit être après la date de début."):
        super().__init__(message)


class UnavailableDateError(SelectionError):
    """A day of the requested rental range is already booked"""

    def __init__(self, day: date, item_id=None):
        self.date = day
        self.item_id = item_id
        super().__init__(
            f"La robe n'est pas disponible le {day.isoformat()}. Veuillez choisir d'autres dates."
        )


class IncompleteSelectionError(SelectionError):
    """Required variant fields are missing; messages are kept per field"""

    def __init__(self, missing: Dict[str, str]):
        self.missing = dict(missing)
        super().__init__("Sélection incomplète : " + ", ".join(sorted(self.missing)))

    def as_errors(self) -> Dict[str, List[str]]:
        return {name: [message] for name, message in self.missing.items()}


class NotForSaleError(SelectionError):
    """The item cannot be bought (or rented) the way it was requested"""

    field = 'kind'


class UnknownItemError(SelectionError):
    """The selection references a dress that is not in the catalog"""

    field = 'item_id'

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Robe introuvable : {item_id}.")
