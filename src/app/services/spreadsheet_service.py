"""Spreadsheet Service Interface

Defines the contract for rendering tabular exports to workbook files.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence


class SpreadsheetService(ABC):
    """Service interface for workbook rendering"""

    @abstractmethod
    def render_workbook(
        self,
        sheet_title: str,
        headers: List[str],
        rows: Sequence[Sequence[str]],
    ) -> bytes:
        """
        Render one sheet with a header row followed by data rows

        Args:
            sheet_title: Worksheet name
            headers: Column headers
            rows: Data rows, one value per header

        Returns:
            Workbook file content (.xlsx) as bytes
        """
        pass
