#!/usr/bin/env python3
# Path: spec_builder/main.py
"""
Product Specification Builder (spec_builder) - Main Entry Point

Resolves extracted test names against the test catalogue and saves the
resulting product specification.

Data Flow:
    INPUT:  Catalogue JSON or YAML, extraction JSON (productName, extractedTests)
    PROCESS: Ranking, auto-acceptance, operator resolution
    OUTPUT: Product store, optional product JSON export, audit log

Usage:
    spec-builder --catalogue cat.json --extraction doc.json
    spec-builder --extraction doc.json --non-interactive
    spec-builder --resume PRODUCT_ID          # database backend only

Prerequisites:
    - Configured .env file (optional, defaults work in memory)
    - PostgreSQL or SQLite database for persistent storage (optional)
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from spec_builder.config_loader import ConfigLoader
from spec_builder.constants import (
    AuditAction,
    STATUS_OK, STATUS_FAIL, STATUS_WARN, STATUS_INFO,
    MENU_HEADER, MENU_SEPARATOR,
)
from spec_builder.core.logger import setup_ipo_logging, get_input_logger
from spec_builder.core.ui.user_input import ResolutionConsole
from spec_builder.process.matcher import ExtractedData, MatchRanker, MatchSettings
from spec_builder.process.resolution import (
    ProductSpecification,
    ResolutionWorkflow,
    WorkflowStatus,
)
from spec_builder.storage import (
    create_storage,
    AuditLog,
    CatalogueStore,
    OverrideStore,
    ProductStore,
    StorageError,
)


def print_banner() -> None:
    """Print application banner."""
    print()
    print(MENU_HEADER)
    print("  SPEC_BUILDER - Product Specification Builder")
    print("  Catalogue Matching & Resolution")
    print(MENU_HEADER)
    print()


def print_system_info(config: ConfigLoader) -> None:
    """
    Print system configuration information.

    Args:
        config: ConfigLoader instance
    """
    print(f"  Environment: {config.get('environment')}")
    print(f"  Storage:     {config.get('storage_backend')}")
    print(f"  Threshold:   {config.get('confidence_threshold')}")
    print()


def load_extraction(path: Path) -> ExtractedData:
    """
    Read an extraction file.

    Accepts the full envelope ({productName, extractedTests, ...}) or a
    bare list of extracted tests.

    Args:
        path: Extraction JSON file

    Returns:
        ExtractedData

    Raises:
        ValueError: If the file is not valid extraction JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    if isinstance(payload, list):
        payload = {'extractedTests': payload}
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: expected an extraction object or list")

    return ExtractedData.from_dict(payload)


def new_product(data: ExtractedData) -> ProductSpecification:
    """Create the product header for an extraction."""
    product = ProductSpecification(
        name=data.product_name or '',
        code=data.product_code or '',
    )
    if data.effective_date:
        product.effective_date = data.effective_date
    return product


def export_product(product: ProductSpecification, path: Path) -> None:
    """Write a product to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(product.to_dict(), f, indent=2)


def print_summary(product: ProductSpecification) -> None:
    """
    Print the resolved rows of a product.

    Args:
        product: Saved product
    """
    rows = product.sorted_specs()
    unresolved = len(product.unresolved_rows())

    print("\n" + MENU_HEADER)
    print(f"  {product.name or '(unnamed)'} {product.code}  ({product.effective_date})")
    print(MENU_SEPARATOR)
    print(f"  {'Ord':>4}  {'Code':<8} {'Test':<30} {'Min':>8} {'Max':>8} {'Units':<6} Text")

    for row in rows:
        name = f"{row.analysis} {row.component}"[:30]
        print(
            f"  {row.order:>4}  {row.test_code:<8} {name:<30} "
            f"{row.effective_min:>8} {row.effective_max:>8} {row.units:<6} {row.effective_text}"
        )

    print(MENU_SEPARATOR)
    if unresolved:
        print(f"  {STATUS_WARN} {unresolved}/{len(rows)} rows unresolved")
    else:
        print(f"  {STATUS_OK} All {len(rows)} rows resolved")
    print(MENU_HEADER)


def run(args: argparse.Namespace, config: ConfigLoader, logger) -> int:
    """
    Run one resolution session.

    Args:
        args: Parsed command line arguments
        config: Configuration loader
        logger: Logger instance

    Returns:
        Exit code (0 for success)
    """
    storage = create_storage(config)
    audit_log = AuditLog(storage, config.get('audit_log_limit'))
    catalogue_store = CatalogueStore(storage, audit_log=audit_log)
    override_store = OverrideStore(storage)
    product_store = ProductStore(storage, audit_log=audit_log)

    if args.catalogue:
        entries = catalogue_store.import_file(args.catalogue)
        audit_log.record(AuditAction.IMPORT, f"Imported catalogue {args.catalogue.name}")
        logger.info(f"Imported {len(entries)} catalogue entries from {args.catalogue}")

    catalogue = catalogue_store.load()
    if not catalogue:
        print(f"{STATUS_WARN} Catalogue is empty: every test will stay unresolved")

    ranker = MatchRanker(
        override_store=override_store,
        settings=MatchSettings.from_config(config),
    )
    workflow = ResolutionWorkflow(ranker, override_store, audit_log=audit_log, config=config)

    if args.resume:
        product = product_store.get(args.resume)
        if product is None:
            print(f"\n{STATUS_FAIL} No saved product with id {args.resume}")
            return 1
        workflow.resume(product, catalogue)
    else:
        data = load_extraction(args.extraction)
        logger.info(
            f"Loaded {len(data.extracted_tests)} extracted tests from {args.extraction}"
        )
        product = new_product(data)
        workflow.start(data.extracted_tests, catalogue)

    auto = len(workflow.rows) - workflow.pending_count
    print(f"{STATUS_INFO} {auto}/{len(workflow.rows)} tests resolved automatically, "
          f"{workflow.pending_count} need review")

    if workflow.state.status == WorkflowStatus.RESOLVING:
        if args.non_interactive:
            workflow.skip()
        else:
            ResolutionConsole(workflow).run()

    product.specs = workflow.rows
    product_store.save(product)

    if args.product_out:
        export_product(product, args.product_out)
        audit_log.record(AuditAction.EXPORT, f"Exported product {product.code}")
        print(f"{STATUS_OK} Product written to {args.product_out}")

    if not args.quiet:
        print_summary(product)
    print(f"{STATUS_OK} Saved product {product.id}")

    return 0


def initialize_system() -> ConfigLoader:
    """
    Initialize spec_builder system components.

    Returns:
        ConfigLoader
    """
    config = ConfigLoader()

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True) and not config.get('debug', False)
    )

    return config


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='spec-builder',
        description='spec_builder - Product Specification Builder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  spec-builder --catalogue cat.json --extraction doc.json
  spec-builder --extraction doc.json --product-out product.json
  spec-builder --extraction doc.json --non-interactive
  spec-builder --resume 3f2c...      Resume a saved product
        """
    )

    parser.add_argument(
        '--catalogue', '-c',
        type=Path,
        help='Catalogue file (JSON or YAML) to import before resolving'
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--extraction', '-e',
        type=Path,
        help='Extraction JSON for one source document'
    )
    source.add_argument(
        '--resume', '-r',
        metavar='PRODUCT_ID',
        help='Reopen unresolved rows of a saved product'
    )

    parser.add_argument(
        '--product-out', '-o',
        type=Path,
        help='Write the saved product to this JSON file'
    )

    parser.add_argument(
        '--non-interactive', '-n',
        action='store_true',
        help='Leave items needing review unresolved instead of prompting'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress banner and summary'
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for spec_builder.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)

    if not args.quiet:
        print_banner()

    try:
        config = initialize_system()
        logger = get_input_logger('main')

        if not args.quiet:
            print_system_info(config)

        return run(args, config, logger)

    except (ValueError, KeyError, OSError, StorageError) as e:
        print(f"\n{STATUS_FAIL} Error: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130

    except Exception as e:
        print(f"\n{STATUS_FAIL} Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
