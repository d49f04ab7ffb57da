"""CLI entry point for refundtrack."""

from __future__ import annotations

import argparse
import asyncio
import json
import math
import sys
from datetime import date

from dotenv import load_dotenv

from .config import TrackerConfig, load_config
from .db import ProductDB, SummaryDB
from .edits import (
    SetItem,
    SetOrderDate,
    SetPaid,
    SetReceived,
    SetStage,
    SetUrl,
    apply_edit,
)
from .filters import DeltaFilter, StatusFilter
from .finance import format_currency
from .logging_setup import configure_logging
from .models import Product, Stage, new_product
from .receipt import ExtractedOrder
from .tracker import ProductTracker

_STAGE_OPTIONS = {
    "placed": Stage.ORDER_PLACED,
    "delivered": Stage.ORDER_DELIVERED,
    "review-added": Stage.REVIEW_ADDED,
    "review-live": Stage.REVIEW_LIVE,
    "ss-sent": Stage.REVIEW_SS_SENT,
}


def _amount(value: str) -> float | None:
    if value.strip().lower() in ("", "none", "null", "-"):
        return None
    try:
        amount = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an amount: {value!r}") from None
    if not math.isfinite(amount):
        raise argparse.ArgumentTypeError(f"amount must be finite, got {value!r}")
    return amount


def _date(value: str) -> date | None:
    if value.strip().lower() in ("", "none", "null", "-"):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--search", "-s", type=str, default="", help="Case-insensitive name search")
    p.add_argument(
        "--status",
        type=str,
        default="",
        choices=[f.value for f in StatusFilter],
        help="Status category",
    )
    p.add_argument(
        "--delta",
        type=str,
        default="",
        choices=[f.value for f in DeltaFilter],
        help="Delta sign",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refundtrack",
        description="Track Amazon review purchases from order to refund",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Config file path (TOML)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # list
    list_parser = sub.add_parser("list", help="Show tracked products")
    _add_filter_args(list_parser)
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # stats
    stats_parser = sub.add_parser("stats", help="Show dashboard totals")
    stats_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # add
    add_parser = sub.add_parser("add", help="Start tracking a purchase")
    add_parser.add_argument("item", nargs="?", default="", help="Product name")
    add_parser.add_argument("--url", type=str, default=None)
    add_parser.add_argument("--date", type=_date, default=None, help="Order date (YYYY-MM-DD)")
    add_parser.add_argument("--paid", type=_amount, default=None)
    add_parser.add_argument("--received", type=_amount, default=None)
    add_parser.add_argument(
        "--receipt", type=str, default=None, metavar="IMAGE",
        help="Pre-fill name, date and amount from a receipt image",
    )

    # edit
    edit_parser = sub.add_parser("edit", help="Edit a tracked product")
    edit_parser.add_argument("id", type=int)
    edit_parser.add_argument("--item", type=str, default=None)
    edit_parser.add_argument("--url", type=str, default=None)
    edit_parser.add_argument("--date", type=_date, default=argparse.SUPPRESS)
    edit_parser.add_argument("--paid", type=_amount, default=argparse.SUPPRESS)
    edit_parser.add_argument("--received", type=_amount, default=argparse.SUPPRESS)
    for option in _STAGE_OPTIONS:
        edit_parser.add_argument(
            f"--{option}", action=argparse.BooleanOptionalAction, default=None
        )

    # void / delete
    void_parser = sub.add_parser("void", help="Mark a product as void")
    void_parser.add_argument("id", type=int)
    delete_parser = sub.add_parser("delete", help="Remove a product")
    delete_parser.add_argument("id", type=int)

    # import
    import_parser = sub.add_parser("import", help="Add every item on a receipt image")
    import_parser.add_argument("image", type=str)
    import_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # report
    report_parser = sub.add_parser("report", help="Write the dashboard to a PDF file")
    report_parser.add_argument("output", type=str, metavar="FILE")
    _add_filter_args(report_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    config = load_config(args.config)
    configure_logging("DEBUG" if args.verbose else config.logging.level)

    db = ProductDB(config.database.path)
    summary_db = SummaryDB(config.database.path)
    tracker = ProductTracker(db, summary_db)
    try:
        tracker.refresh()
        match args.command:
            case "list":
                ok = _cmd_list(tracker, args)
            case "stats":
                ok = _cmd_stats(tracker, config, args)
            case "add":
                ok = asyncio.run(_cmd_add(tracker, config, args))
            case "edit":
                ok = _cmd_edit(tracker, args)
            case "void":
                ok = _report(tracker, tracker.mark_void(args.id), f"Marked {args.id} as void")
            case "delete":
                ok = _report(tracker, tracker.delete_product(args.id), f"Deleted {args.id}")
            case "import":
                ok = asyncio.run(_cmd_import(tracker, config, args))
            case "report":
                ok = _cmd_report(tracker, config, args)
            case _:
                ok = False
    finally:
        db.close()
        summary_db.close()

    if not ok:
        sys.exit(1)


def _report(tracker: ProductTracker, ok: bool, message: str) -> bool:
    if ok:
        print(message)
    else:
        print(f"Error: {tracker.last_error}", file=sys.stderr)
    return ok


def _format_row(p: Product) -> str:
    stages = "".join("x" if p.stage(s) else "." for s in Stage)
    when = p.order_date.isoformat() if p.order_date else "-"
    return (
        f"{p.id:>4}  {when:<10}  {p.status.value:<16}  [{stages}]  "
        f"{format_currency(p.paid):>10} {format_currency(p.received):>10} "
        f"{format_currency(p.delta):>10}  {p.item}"
    )


def _cmd_list(tracker: ProductTracker, args) -> bool:
    products = tracker.view(args.search, args.status, args.delta)
    if args.json:
        print(json.dumps([p.to_dict() for p in products], indent=2))
        return True
    if not products:
        print("No products found.")
        return True
    print(f"{'ID':>4}  {'Ordered':<10}  {'Status':<16}  Stages   "
          f"{'Paid':>10} {'Received':>10} {'Delta':>10}  Item")
    for p in products:
        print(_format_row(p))
    return True


def _cmd_stats(tracker: ProductTracker, config: TrackerConfig, args) -> bool:
    stats = tracker.stats()
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
        return True
    cur = config.report.currency
    print(f"Total products:     {stats.total_products}")
    print(f"Completed orders:   {stats.completed_orders}")
    print(f"Total paid:         {format_currency(stats.total_paid, cur)}")
    print(f"Total received:     {format_currency(stats.total_received, cur)}")
    print(f"Remaining refund:   {format_currency(stats.remaining_exposure, cur)}")
    label = "profit" if stats.is_profitable else "loss"
    print(f"Net {label}:{' ' * (15 - len(label))}{format_currency(stats.net_delta, cur)}")
    return True


async def _extract(config: TrackerConfig, image: str) -> ExtractedOrder | None:
    from .receipt import create_extractor

    try:
        extractor = create_extractor(config)
        print("Reading receipt...")
        return await extractor.extract(image)
    except (ValueError, ImportError, OSError) as e:
        print(f"Receipt error: {e}", file=sys.stderr)
        return None


async def _cmd_add(tracker: ProductTracker, config: TrackerConfig, args) -> bool:
    product = new_product(args.item, url=args.url, order_date=args.date)

    if args.receipt:
        from .receipt.importer import prefill_product

        order = await _extract(config, args.receipt)
        if order is None:
            return False
        if order.is_empty:
            print("No order data found on the receipt.", file=sys.stderr)
        product = prefill_product(product, order)
        # Explicit options win over receipt values
        if args.item:
            product = apply_edit(product, SetItem(args.item))
        if args.date is not None:
            product = apply_edit(product, SetOrderDate(args.date))

    if args.paid is not None:
        product = apply_edit(product, SetPaid(args.paid))
    if args.received is not None:
        product = apply_edit(product, SetReceived(args.received))

    return _report(tracker, tracker.add_product(product), f"Added {product.item!r}")


def _cmd_edit(tracker: ProductTracker, args) -> bool:
    edits = []
    if args.item is not None:
        edits.append(SetItem(args.item))
    if args.url is not None:
        edits.append(SetUrl(args.url))
    if "date" in args:
        edits.append(SetOrderDate(args.date))
    if "paid" in args:
        edits.append(SetPaid(args.paid))
    if "received" in args:
        edits.append(SetReceived(args.received))
    for option, stage in _STAGE_OPTIONS.items():
        value = getattr(args, option.replace("-", "_"))
        if value is not None:
            edits.append(SetStage(stage, value))

    if not edits:
        print("Nothing to change.", file=sys.stderr)
        return False
    return _report(tracker, tracker.edit_product(args.id, *edits), f"Updated {args.id}")


async def _cmd_import(tracker: ProductTracker, config: TrackerConfig, args) -> bool:
    order = await _extract(config, args.image)
    if order is None:
        return False
    if not order.items:
        print("No order items found on the receipt.", file=sys.stderr)
        return False

    result = tracker.import_order(order)
    if args.json:
        print(json.dumps(
            {"success": result.success, "failed": result.failed, "items": result.items},
            indent=2,
        ))
    else:
        print(f"Imported {result.success} product(s)")
        for name in result.items:
            print(f"  {name if len(name) <= 50 else name[:50] + '...'}")
        if result.failed:
            print(f"Failed to import {result.failed} product(s)", file=sys.stderr)
    return result.failed == 0


def _cmd_report(tracker: ProductTracker, config: TrackerConfig, args) -> bool:
    from .pdf import generate_report

    products = tracker.view(args.search, args.status, args.delta)
    try:
        path = generate_report(
            tracker.stats(),
            products,
            args.output,
            title=config.report.title,
            currency=config.report.currency,
        )
    except ImportError as e:
        print(f"PDF error: {e}", file=sys.stderr)
        return False
    print(f"Report saved: {path}")
    return True
