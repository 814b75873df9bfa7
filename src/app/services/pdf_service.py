"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.app.use_cases.accounts.dtos import OrderLedgerDTO


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF rendering of order ledger statements.
    """

    @abstractmethod
    def generate_ledger_statement(
        self,
        ledger: "OrderLedgerDTO",
        company_name: str,
        company_address: str,
    ) -> bytes:
        """
        Generate a ledger statement PDF

        Args:
            ledger: Computed order ledger
            company_name: Company name to display on the statement
            company_address: Company address to display on the statement

        Returns:
            PDF document as bytes
        """
        pass
