#!/usr/bin/env python3
# scripts/run.py
"""
Render report documents or run the export API.

Usage:
    python scripts/run.py --export report.json --formats pdf,xlsx   # Render files
    python scripts/run.py --export report.json --copy               # Copy table to clipboard
    python scripts/run.py --run                                     # Start the server
"""

import asyncio
import json
import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def export_file(source: Path, formats, output_dir=None) -> bool:
    """Render one JSON document into each requested format."""
    from report_export.core.exceptions import ReportExportException
    from report_export.export import Document, ExportService
    from report_export.utils.logger import setup_logger

    logger = setup_logger(__name__)
    document = Document.from_dict(json.loads(source.read_text(encoding="utf-8")))
    service = ExportService.from_config()

    ok = True
    for export_format in formats:
        try:
            generated = service.export(document, export_format)
            path = service.save_to_disk(generated, output_dir)
            logger.info(f"{export_format}: {path}")
        except ReportExportException as e:
            logger.error(f"{export_format}: {e}")
            ok = False
    return ok


def copy_table(source: Path) -> bool:
    """Copy the document's table to the system clipboard."""
    from report_export.core.exceptions import ReportExportException
    from report_export.export import Document, ExportService, SystemClipboard
    from report_export.utils.logger import setup_logger

    logger = setup_logger(__name__)
    document = Document.from_dict(json.loads(source.read_text(encoding="utf-8")))
    service = ExportService.from_config(clipboard=SystemClipboard())

    try:
        logger.info(asyncio.run(service.copy_for_sheets(document)))
        return True
    except ReportExportException as e:
        logger.error(str(e))
        return False


def start_server(host="localhost", port=8000):
    """Start the FastAPI server."""
    from report_export.utils.logger import setup_logger

    logger = setup_logger(__name__)
    logger.info("Starting FastAPI server...")
    logger.info(f"   Host: {host}")
    logger.info(f"   Port: {port}")
    logger.info(f"   API docs: http://{host}:{port}/docs")

    import uvicorn
    from report_export.main import app

    uvicorn.run(app, host=host, port=port, log_level="info")


def main():
    parser = argparse.ArgumentParser(description="Render report documents or run the export API")
    parser.add_argument("--export", type=Path, help="JSON document to render")
    parser.add_argument("--formats", type=str, default="pdf,docx,xlsx,csv,json",
                        help="Comma-separated formats")
    parser.add_argument("--out", type=Path, default=None, help="Output directory")
    parser.add_argument("--copy", action="store_true", help="Copy the table to the clipboard")
    parser.add_argument("--run", action="store_true", help="Start server")
    parser.add_argument("--host", type=str, default="localhost")
    parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()

    if args.export and args.copy:
        sys.exit(0 if copy_table(args.export) else 1)
    elif args.export:
        formats = [f.strip() for f in args.formats.split(",") if f.strip()]
        sys.exit(0 if export_file(args.export, formats, args.out) else 1)
    elif args.run:
        start_server(args.host, args.port)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
