from beacon.domains.exchange.codec import export_as_json, export_as_html, parse_import, validate_payload
from beacon.domains.exchange.schemas import (
    ImportedPage, ImportPayload, ExportRequest, ExportResponse, ImportRequest, ImportResponse
)
from beacon.domains.exchange.services import ExchangeService

__all__ = [
    "export_as_json", "export_as_html", "parse_import", "validate_payload",
    "ImportedPage", "ImportPayload", "ExportRequest", "ExportResponse",
    "ImportRequest", "ImportResponse",
    "ExchangeService"
]
