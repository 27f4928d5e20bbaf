"""
Word document renderer
Builds a .docx summary table of scenario records
"""

import re
from io import BytesIO
from typing import List, Sequence

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Inches

from feature2docx.core.exceptions import NoScenariosError
from feature2docx.parser.feature_parser import ScenarioRecord
from feature2docx.utils.logger import setup_logger

logger = setup_logger(__name__)

DOCX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'

# Characters XML 1.0 does not allow; python-docx refuses them
XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

# (header, share of the table width in percent)
COLUMNS = [
    ('No', 5),
    ('Tags', 15),
    ('Scenario', 25),
    ('Steps', 55),
]


def xml_safe(text: str) -> str:
    """Replace characters that cannot be stored in a .docx with spaces"""
    return XML_INVALID_CHARS.sub(" ", text)

class DocxRenderer:
    """Render scenario records as a Word table"""

    def __init__(self, table_width_inches: float = 6.5, table_style: str = 'Table Grid'):
        self.table_width = Inches(table_width_inches)
        self.table_style = table_style

    def render(self, records: Sequence[ScenarioRecord], title: str) -> bytes:
        """Render records under a 'Feature: <title>' heading and return the .docx bytes"""
        if not records:
            raise NoScenariosError()

        document = Document()

        heading = document.add_heading(xml_safe(f"Feature: {title}"), level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        document.add_paragraph(" ")

        table = document.add_table(rows=1, cols=len(COLUMNS))
        table.style = self.table_style
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        table.autofit = False

        self._build_header(table.rows[0])
        for index, record in enumerate(records, 1):
            self._add_record_row(table, index, record)

        self._apply_widths(table)

        buffer = BytesIO()
        document.save(buffer)
        logger.info(f"Rendered {len(records)} scenarios for '{title}'")
        return buffer.getvalue()

    def _build_header(self, row) -> None:
        for cell, (label, _) in zip(row.cells, COLUMNS):
            paragraph = cell.paragraphs[0]
            paragraph.add_run(label).bold = True
            if label == 'No':
                paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        self._repeat_as_header(row)

    def _add_record_row(self, table, index: int, record: ScenarioRecord) -> None:
        cells = table.add_row().cells

        number = cells[0].paragraphs[0]
        number.text = str(index)
        number.alignment = WD_ALIGN_PARAGRAPH.CENTER

        cells[1].paragraphs[0].text = xml_safe(record.tags)
        cells[2].paragraphs[0].text = xml_safe(record.name)

        # One paragraph per step
        steps_cell = cells[3]
        steps_cell.paragraphs[0].text = xml_safe(record.steps[0])
        for step in record.steps[1:]:
            steps_cell.add_paragraph(xml_safe(step))

    def _apply_widths(self, table) -> None:
        widths = self.column_widths()
        for row in table.rows:
            for cell, width in zip(row.cells, widths):
                cell.width = width

    def column_widths(self) -> List[int]:
        """Column widths in EMU, proportional to the configured percentages"""
        return [Emu(int(self.table_width * percent / 100)) for _, percent in COLUMNS]

    @staticmethod
    def _repeat_as_header(row) -> None:
        """Mark the row to repeat at the top of every page"""
        tr_pr = row._tr.get_or_add_trPr()
        tbl_header = OxmlElement('w:tblHeader')
        tbl_header.set(qn('w:val'), 'true')
        tr_pr.append(tbl_header)
