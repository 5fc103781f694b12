from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from inventory_dashboard.config.loader import ConfigError, load_config, resolve_config_path
from inventory_dashboard.errors import (
    CsvParseError,
    DeviceNotFoundError,
    InventoryError,
    NoDataError,
    UnsupportedFileError,
    ValidationFailedError,
)
from inventory_dashboard.logging.init import enable_debug, log_summary, setup_logging
from inventory_dashboard.models.config_models import DashboardConfig
from inventory_dashboard.models.inventory import Device
from inventory_dashboard.models.query_models import ASC, DESC, FilterCriteria, QueryParams
from inventory_dashboard.services.aggregate import compute_statistics, device_power, summarize_device
from inventory_dashboard.services.charts import component_chart, device_chart, power_distribution_chart
from inventory_dashboard.services.export import export_devices_csv, render_statistics_report, sample_csv
from inventory_dashboard.services.pipeline import ingest_file
from inventory_dashboard.services.query import (
    COMPONENT_SORT_FIELDS,
    DEVICE_SORT_FIELDS,
    filter_devices,
    run_query,
    search_components,
    search_devices,
    sort_components,
)
from inventory_dashboard.services.store import SnapshotStore
from inventory_dashboard.services.summary import format_number, render_summary_line

"""CLI entrypoint (presentation shell of the inventory dashboard).

Flow for every command:
- load .env, then config/dashboard.yml
- open the snapshot store
- run the subcommand against the stored Device list

Exit codes: 0 success, 1 fatal, 2 load succeeded with warnings.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_WITH_WARNINGS = 2


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv. Existing variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--search", help="Free-text search over devices and components")
    p.add_argument("--device-code", help="Device code contains")
    p.add_argument("--work-location", help="Work location contains")
    p.add_argument("--name", help="Some component name contains")
    p.add_argument("--spec", help="Some component spec contains")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="inventory-dashboard", description="Device inventory CSV analyzer")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help="Path to dashboard.yml")
    sub = p.add_subparsers(dest="command", required=True)

    p_load = sub.add_parser("load", help="Validate a CSV file and store it as the current inventory")
    p_load.add_argument("file", type=Path)

    sub.add_parser("stats", help="Print inventory statistics")

    p_list = sub.add_parser("list", help="List devices (search -> filter -> sort -> page)")
    _add_filter_args(p_list)
    p_list.add_argument("--sort", choices=sorted(DEVICE_SORT_FIELDS), default=None)
    p_list.add_argument("--desc", action="store_true", help="Sort descending")
    p_list.add_argument("--page", type=int, default=1)
    p_list.add_argument("--page-size", type=int, default=None)

    p_show = sub.add_parser("show", help="Show one device and its components")
    p_show.add_argument("device_id")
    p_show.add_argument("--search", help="Search component name / spec / remark")
    p_show.add_argument("--sort", choices=sorted(COMPONENT_SORT_FIELDS), default=None)
    p_show.add_argument("--desc", action="store_true")

    p_export = sub.add_parser("export", help="Export (filtered) devices as CSV")
    _add_filter_args(p_export)
    p_export.add_argument("--device-id", help="Export a single device")
    p_export.add_argument("--output", type=Path, default=None)

    p_report = sub.add_parser("report", help="Write the plain-text statistics report")
    p_report.add_argument("--output", type=Path, default=None)

    sub.add_parser("charts", help="Print chart data as JSON")

    p_sample = sub.add_parser("sample", help="Write the sample inventory CSV")
    p_sample.add_argument("--output", type=Path, default=None)

    sub.add_parser("clear", help="Remove the stored inventory")
    return p.parse_args(argv)


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        print(text)
    else:
        # Excel で開けるよう BOM 付きで書き出す
        output.write_text(text, encoding="utf-8-sig")


def _criteria(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        device_code=args.device_code,
        work_location=args.work_location,
        name=args.name,
        spec=args.spec,
    )


def _format_device_line(device: Device) -> str:
    return (
        f"{device.id}\t{device.device_code}\t{device.work_location}\t"
        f"components={len(device.components)}\tpower_kw={format_number(device_power(device))}"
    )


def _cmd_load(args: argparse.Namespace, cfg: DashboardConfig, store: SnapshotStore, logger) -> int:
    try:
        result = ingest_file(args.file, store, fallback_label=cfg.fallback_label)
    except (UnsupportedFileError, CsvParseError) as e:
        logger.error(f"load: {e}")
        return EXIT_FATAL
    except ValidationFailedError as e:
        for message in e.result.errors:
            logger.error(f"validation: {message}")
        return EXIT_FATAL
    logger.info(f"stored {len(result.devices)} devices from {result.file_name} at {result.uploaded_at}")
    if result.issue_log_path is not None:
        logger.info(f"issue log: {result.issue_log_path}")
    log_summary(render_summary_line(result))
    return EXIT_WITH_WARNINGS if result.warnings else EXIT_SUCCESS


def _cmd_stats(cfg: DashboardConfig, store: SnapshotStore) -> int:
    snapshot = store.require()
    stats = compute_statistics(snapshot.devices, fallback_label=cfg.fallback_label)
    print(f"file: {snapshot.file_name} (uploaded {snapshot.uploaded_at})")
    print(f"devices: {stats.device_count}")
    print(f"components: {stats.component_count}")
    print(f"motor power total: {stats.total_power:.2f}KW")
    print("devices by work location:")
    for name, count in stats.devices_by_location.items():
        print(f"  {name}: {count}")
    return EXIT_SUCCESS


def _cmd_list(args: argparse.Namespace, cfg: DashboardConfig, store: SnapshotStore) -> int:
    snapshot = store.require()
    params = QueryParams(
        search=args.search,
        criteria=_criteria(args),
        sort_field=args.sort,
        direction=DESC if args.desc else ASC,
        page=args.page,
        page_size=args.page_size or cfg.page_size,
    )
    page = run_query(snapshot.devices, params)
    for device in page.items:
        print(_format_device_line(device))
    print(f"page {page.page}/{page.total_pages} total={page.total}")
    return EXIT_SUCCESS


def _cmd_show(args: argparse.Namespace, store: SnapshotStore) -> int:
    device = store.get_device(args.device_id)
    summary = summarize_device(device)
    print(f"{device.device_code} ({device.work_location})")
    print(
        f"components={summary.component_count} power_kw={format_number(summary.total_power)} "
        f"types={summary.distinct_component_names} with_remarks={summary.components_with_remarks}"
    )
    components = search_components(device.components, args.search)
    components = sort_components(components, args.sort, DESC if args.desc else ASC)
    for c in components:
        print(f"  {c.name}\t{c.spec}\t{c.quantity_text}\t{c.power_text}\t{c.remark}")
    return EXIT_SUCCESS


def _cmd_export(args: argparse.Namespace, store: SnapshotStore) -> int:
    if args.device_id:
        devices = [store.get_device(args.device_id)]
    else:
        devices = store.require().devices
        devices = filter_devices(search_devices(devices, args.search), _criteria(args))
    _emit(export_devices_csv(devices), args.output)
    return EXIT_SUCCESS


def _cmd_report(args: argparse.Namespace, cfg: DashboardConfig, store: SnapshotStore) -> int:
    stats = compute_statistics(store.require().devices, fallback_label=cfg.fallback_label)
    _emit(render_statistics_report(stats, top=cfg.report_top_components), args.output)
    return EXIT_SUCCESS


def _cmd_charts(cfg: DashboardConfig, store: SnapshotStore) -> int:
    devices = store.require().devices
    stats = compute_statistics(devices, fallback_label=cfg.fallback_label)
    payload = {
        "devices_by_location": device_chart(stats).to_dict(),
        "top_components": component_chart(stats, cfg.chart_top_components).to_dict(),
        "power_distribution": power_distribution_chart(devices).to_dict(),
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    if args.command == "sample":
        _emit(sample_csv(), args.output)
        return EXIT_SUCCESS

    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    store = SnapshotStore(Path(cfg.store_directory))
    try:
        if args.command == "load":
            return _cmd_load(args, cfg, store, logger)
        if args.command == "stats":
            return _cmd_stats(cfg, store)
        if args.command == "list":
            return _cmd_list(args, cfg, store)
        if args.command == "show":
            return _cmd_show(args, store)
        if args.command == "export":
            return _cmd_export(args, store)
        if args.command == "report":
            return _cmd_report(args, cfg, store)
        if args.command == "charts":
            return _cmd_charts(cfg, store)
        if args.command == "clear":
            removed = store.clear()
            logger.info("stored inventory removed" if removed else "nothing to clear")
            return EXIT_SUCCESS
    except NoDataError as e:
        logger.error(f"{args.command}: {e}")
        return EXIT_FATAL
    except DeviceNotFoundError as e:
        logger.error(f"{args.command}: {e}")
        return EXIT_FATAL
    except InventoryError as e:  # QueryError / StoreError
        logger.error(f"{args.command}: {e}")
        return EXIT_FATAL
    return EXIT_FATAL  # pragma: no cover (argparse rejects unknown commands)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
