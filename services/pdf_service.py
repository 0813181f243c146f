import logging
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.settings import settings

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class PDFService:
    def __init__(self, template_dir: str = None):
        # 템플릿 환경 설정 (미지정 시 프로젝트 templates/)
        template_dir = Path(template_dir or settings.PDF_TEMPLATE_DIR or DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
        )

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """템플릿을 렌더링하여 HTML 생성"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """HTML을 PDF로 변환"""
        # WeasyPrint 는 시스템 라이브러리(pango 등)를 로드하므로 실제 변환 시점에 import
        import weasyprint

        return weasyprint.HTML(string=html_content).write_pdf()

    def render_sport_report_html(self, data: Dict[str, Any]) -> str:
        return self._render_template("sport_report.html", data)

    def generate_sport_report_pdf(self, data: Dict[str, Any]) -> bytes:
        """학생 실기 점수 보고서 PDF 생성"""
        html = self.render_sport_report_html(data)
        pdf = self._html_to_pdf(html)
        logger.info("Rendered sport report PDF (%d bytes)", len(pdf))
        return pdf


pdf_service = PDFService()
