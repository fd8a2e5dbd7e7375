from .filesystem_report_storage import FilesystemReportStorage
from .pdfminer_text_adapter import PdfMinerTextAdapter
from .sqlite_storage import SQLiteStorage

__all__ = ["FilesystemReportStorage", "PdfMinerTextAdapter", "SQLiteStorage"]
