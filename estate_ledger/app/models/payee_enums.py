"""
Payee enumerations.
"""

import enum


class PayeeKind(str, enum.Enum):
    """Payee kind enumeration."""
    WORKER = "WORKER"  # Site labour paid per engagement
    VENDOR = "VENDOR"  # Material and service suppliers

    @property
    def label(self) -> str:
        return self.value.capitalize()
