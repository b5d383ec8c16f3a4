"""Parse a generated HTML page into blocks and persist it.

Prints the ordered blocks (and optionally the re-serialized document) so the
parse can be checked by eye before the page is opened in the editor.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

CURRENT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CURRENT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv(PROJECT_ROOT / ".env")

from page_blocks.config import ParserConfig, StorageConfig
from page_blocks.db.engine import create_session_factory, engine_from_config
from page_blocks.db.schema import create_all
from page_blocks.models.page import PageSnapshot
from page_blocks.parser import load_html_path
from page_blocks.renderers import serialize_blocks
from page_blocks.repositories.page_repository import PageRepository
from page_blocks.store import load_page, save_page


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest a generated HTML page into the block store.")
    parser.add_argument("path", type=Path, help="Path to an HTML document.")
    parser.add_argument("--project", default="local", help="Project id to store the page under.")
    parser.add_argument("--page", default=None, help="Page id (defaults to the file stem).")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL; defaults to DATABASE_URL or in-memory SQLite.",
    )
    parser.add_argument("--wrapper", default="main", help="Tag name of the content wrapper.")
    parser.add_argument(
        "--render",
        action="store_true",
        help="Print the document rebuilt from the stored blocks.",
    )
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=logging.INFO if not args.quiet else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    logger = logging.getLogger("ingest_html")

    config = ParserConfig(wrapper_tag=args.wrapper)
    page_id = args.page or args.path.stem

    result = load_html_path(args.path, config=config)
    for gap in result.gaps:
        logger.info("Block %s is missing its %s element", gap.block_id, gap.field)

    engine = engine_from_config(StorageConfig(database_url=args.database_url))
    create_all(engine)
    repository = PageRepository(create_session_factory(engine))

    save_page(
        repository,
        PageSnapshot(
            project_id=args.project,
            page_id=page_id,
            blocks=tuple(result.blocks),
            theme=result.theme,
        ),
        config=config,
    )
    logger.info("Stored %s block(s) for %s/%s", len(result.blocks), args.project, page_id)

    snapshot = load_page(repository, args.project, page_id, config=config)
    if not snapshot.blocks:
        raise SystemExit("No blocks were stored for this page.")

    print(f"Persisted page {args.project}/{page_id} with {len(snapshot.blocks)} blocks:\n")
    for _block_id, index in snapshot.order_indexes():
        _print_block(snapshot, index)

    if args.render:
        print()
        print(serialize_blocks(snapshot.blocks, snapshot.theme, config=config))


def _print_block(snapshot: PageSnapshot, index: int) -> None:
    block = snapshot.blocks[index]
    label = block.content_text().splitlines()[0][:60] if block.content_text() else ""
    print(f"{index:>3} {block.type.value} ({block.id})", end="")
    if label:
        print(f": {label}")
    else:
        print()
    if block.styles is not None:
        print(f"      style: {block.styles.to_css()}")


if __name__ == "__main__":
    main()
