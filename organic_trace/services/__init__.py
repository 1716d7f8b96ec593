from organic_trace.services.assembler import assemble_entries, assemble_exits, assemble_usage
from organic_trace.services.lookup import build_index
from organic_trace.services.table_client import OrderBy, TableClient
from organic_trace.services.timeline import assemble_timeline
from organic_trace.services.view_controller import ViewController
from organic_trace.services.view_service import ViewResult

__all__ = [
    "OrderBy",
    "TableClient",
    "ViewController",
    "ViewResult",
    "assemble_entries",
    "assemble_exits",
    "assemble_timeline",
    "assemble_usage",
    "build_index",
]
