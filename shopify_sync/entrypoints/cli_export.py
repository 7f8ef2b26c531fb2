from __future__ import annotations

import argparse
import json
import logging
import sys

from shopify_sync.application.csv_export import (
    DEFAULT_COLLECTIONS_FILE_NAME,
    DEFAULT_PRODUCTS_FILE_NAME,
    export_collections_csv,
    export_products_csv,
    write_csv,
)
from shopify_sync.application.task_runner import DeferredTaskRunner
from shopify_sync.bootstrap.container import AppContainer, build_container
from shopify_sync.bootstrap.logging import configure_logging
from shopify_sync.bootstrap.settings import resolve_log_dir
from shopify_sync.core.errors import AppError

EXIT_OK = 0
EXIT_SYNC_FAILED = 1
EXIT_EXPORT_FAILED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exporta el catálogo de Shopify a CSV sin abrir la UI")
    parser.add_argument("target", choices=("collections", "products"), help="Qué listado exportar")
    parser.add_argument("--output", help="Ruta del CSV (por defecto en el directorio actual)")
    return parser


def _fail(message: str, code: int) -> int:
    sys.stderr.write(f"{message}\n")
    return code


def run_export(container: AppContainer, runner: DeferredTaskRunner, target: str, output: str) -> int:
    logger = logging.getLogger("shopify_sync.cli_export")
    orchestrator = container.orchestrator

    orchestrator.verify_connection()
    runner.run_pending()
    state = orchestrator.state
    if state.last_error is not None:
        return _fail(state.last_error.user_message, EXIT_SYNC_FAILED)

    if target == "products":
        orchestrator.fetch_products()
        runner.run_pending()
        state = orchestrator.state
        if state.last_error is not None:
            return _fail(state.last_error.user_message, EXIT_SYNC_FAILED)
        text = export_products_csv(state.products)
        rows = len(state.products)
    else:
        text = export_collections_csv(state.collections)
        rows = len(state.collections)

    try:
        destination = write_csv(output, text)
    except AppError as exc:
        return _fail(exc.user_message, EXIT_EXPORT_FAILED)

    summary = {"target": target, "rows": rows, "output": str(destination)}
    if state.notice:
        summary["notice"] = state.notice
    sys.stdout.write(json.dumps(summary, ensure_ascii=False) + "\n")
    logger.info("Exportación CLI finalizada", extra={"extra": summary})
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(resolve_log_dir())
    output = args.output or (DEFAULT_PRODUCTS_FILE_NAME if args.target == "products" else DEFAULT_COLLECTIONS_FILE_NAME)

    runner = DeferredTaskRunner()
    container = build_container(runner)
    try:
        return run_export(container, runner, args.target, output)
    finally:
        container.close()


if __name__ == "__main__":
    raise SystemExit(main())
