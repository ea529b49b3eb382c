# escala/io - Month roster export
from .export import export_to_csv, export_to_excel, month_to_dataframe
from .pdf_export import export_month_to_pdf

__all__ = ["month_to_dataframe", "export_to_csv", "export_to_excel", "export_month_to_pdf"]
