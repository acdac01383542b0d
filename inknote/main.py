"""
Command-line entry for working with .note containers without a window.

Usage:
    inknote export FILE.note [OUT.pdf]
    inknote info FILE.note
"""
import argparse
import logging
import os
import sys

from PyQt5.QtGui import QGuiApplication

from .config import Config
from .core.container import ContainerCodec
from .core.document import PDFExporter
from .core.errors import InknoteError
from .utils import exported_file_name, setup_logging

logger = logging.getLogger(__name__)


def export_container(container_path: str, output_path: str = None) -> str:
    """
    Flatten a container into a PDF next to it.

    Returns:
        Path of the written PDF
    """
    decoded = ContainerCodec.load_from_file(container_path)
    if output_path is None:
        output_path = os.path.join(os.path.dirname(os.path.abspath(container_path)),
                                   exported_file_name(decoded.display_name))

    PDFExporter().export_to_file(decoded.artifact, decoded.annotations, output_path)
    return output_path


def describe_container(container_path: str) -> str:
    """Summarize a container's name, version and strokes per page."""
    with open(container_path, 'rb') as f:
        data = f.read()
    decoded = ContainerCodec.decode(data, source_name=os.path.basename(container_path))
    metadata = ContainerCodec.read_metadata(data)

    lines = [f"Name: {decoded.display_name}"]
    if metadata:
        lines.append(f"Version: {metadata.version}")
        lines.append(f"Created: {metadata.created_at}")
    lines.append(f"Strokes: {decoded.annotations.stroke_count}")
    for page_index, strokes in decoded.annotations.items():
        lines.append(f"  page {page_index + 1}: {len(strokes)}")
    return "\n".join(lines)


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for the command-line entry.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="inknote",
        description="Work with .note annotation containers"
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    export_parser = subparsers.add_parser(
        "export", help="Flatten a container's strokes into a new PDF"
    )
    export_parser.add_argument("container", help="Path to the .note file")
    export_parser.add_argument("output", nargs="?", default=None,
                               help="Output PDF (default: <name>_edited.pdf next to the container)")

    info_parser = subparsers.add_parser(
        "info", help="Show a container's name, version and strokes per page"
    )
    info_parser.add_argument("container", help="Path to the .note file")
    return parser


def main(argv=None) -> int:
    """
    Main function of the command-line entry.

    Usage:
        inknote export FILE.note [OUT.pdf]
        inknote info FILE.note

    Returns:
        Process exit code. Usage errors exit with status 2 through argparse.
    """
    parser = _create_argument_parser()
    args = parser.parse_args(argv)
    setup_logging()

    # Raster painting needs a GUI application, but never a display
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([sys.argv[0]])
        app.setApplicationName(Config.APP_NAME)

    try:
        if args.command == "export":
            print(export_container(args.container, args.output))
        else:
            print(describe_container(args.container))
    except (InknoteError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
