from __future__ import annotations

import io
from pathlib import Path
from typing import List, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdf_canvas
from reportlab.platypus import Table, TableStyle

from diagrams import get_diagram
from formatting.diagram_generator import RenderedDiagram
from formatting.renderers import format_value


class PdfBuilder:
    """One-page handout: title, explanation, the diagram, the data table."""

    def __init__(
        self,
        *,
        pagesize=letter,
        left_margin: int = 72,
        right_margin: int = 72,
        top_margin: int = 72,
        line_height: int = 16,
    ):
        self.pagesize = pagesize
        self.left_margin = left_margin
        self.right_margin = right_margin
        self.top_margin = top_margin
        self.line_height = line_height

    def build_bytes(self, rendered: RenderedDiagram) -> bytes:
        buf = io.BytesIO()
        self._render(rendered, buf)
        return buf.getvalue()

    def build(self, rendered: RenderedDiagram, output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        with output_path.open("wb") as handle:
            self._render(rendered, handle)
        return output_path

    def _render(self, rendered: RenderedDiagram, target) -> None:
        canvas = pdf_canvas.Canvas(target, pagesize=self.pagesize)
        cursor_y = self.pagesize[1] - self.top_margin

        diagram = get_diagram(rendered.result.diagram_type)
        cursor_y = self._draw_header(canvas, diagram.title, cursor_y)
        cursor_y = self._draw_wrapped_text(canvas, diagram.explanation, cursor_y, font_size=11)
        cursor_y = self._draw_image(canvas, rendered, cursor_y - self.line_height * 0.5)
        self._draw_table(canvas, rendered.result.rows(), cursor_y)

        canvas.showPage()
        canvas.save()

    def _draw_header(self, canvas: pdf_canvas.Canvas, title: str, cursor_y: float) -> float:
        canvas.setFont("Helvetica-Bold", 18)
        canvas.drawString(self.left_margin, cursor_y, title)
        return cursor_y - self.line_height * 1.5

    def _draw_image(
        self,
        canvas: pdf_canvas.Canvas,
        rendered: RenderedDiagram,
        cursor_y: float,
    ) -> float:
        max_width = self.pagesize[0] - self.left_margin - self.right_margin
        img_width = max_width
        img_height = max_width * rendered.height / rendered.width

        img = ImageReader(io.BytesIO(rendered.png))
        canvas.drawImage(img, self.left_margin, cursor_y - img_height,
                         width=img_width, height=img_height)
        return cursor_y - img_height - self.line_height

    def _draw_table(self, canvas: pdf_canvas.Canvas, rows: List[tuple], cursor_y: float) -> float:
        font_size = 9
        data = [["Parameter", "Value"]] + [[name, format_value(value)] for name, value in rows]
        table = Table(data, colWidths=[180, 140])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.Color(0.92, 0.92, 0.92)),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), font_size),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
            ('TOPPADDING', (0, 0), (-1, -1), 3),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
        ]))

        _, table_height = table.wrap(0, 0)
        if cursor_y - table_height < self.top_margin:
            canvas.showPage()
            cursor_y = self.pagesize[1] - self.top_margin

        table.drawOn(canvas, self.left_margin, cursor_y - table_height)
        return cursor_y - table_height - self.line_height * 0.5

    def _draw_wrapped_text(
        self,
        canvas: pdf_canvas.Canvas,
        text: str,
        cursor_y: float,
        *,
        font: str = "Helvetica",
        font_size: int = 12,
    ) -> float:
        canvas.setFont(font, font_size)
        max_width = self.pagesize[0] - self.left_margin - self.right_margin
        lines = []
        line = ""
        for word in text.split():
            prospective = f"{line} {word}".strip()
            if canvas.stringWidth(prospective, font, font_size) <= max_width:
                line = prospective
            else:
                lines.append(line)
                line = word
        if line:
            lines.append(line)

        for part in lines:
            canvas.drawString(self.left_margin, cursor_y, part)
            cursor_y -= self.line_height
        return cursor_y


if __name__ == "__main__":
    from formatting.diagram_generator import DiagramGenerator, DiagramSpec
    from diagrams import DiagramType

    rendered = DiagramGenerator().generate(DiagramSpec(DiagramType.MONOPOLY))
    path = PdfBuilder().build(rendered, "sample_output.pdf")
    print(f"Wrote {path}")
