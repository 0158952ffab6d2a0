"""Main entry point for the storefront CLI."""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

from composer.kernel import registry
from composer.kernel.assembly import LayoutAssembly, PendingAssetError, parse_layout
from composer.kernel.products import parse_catalog
from composer.kernel.renderer import render_page
from composer.kernel.types import EDIT_PREVIEW, PUBLIC, LayoutScope, RenderContext, RenderOptions
from storefront import config
from storefront.exceptions import ApiError, LayoutSaveError
from storefront.services.api_client import StorefrontApi
from storefront.services.http_storage import ApiLayoutStorage
from storefront.services.notifier import MemoryNotifier
from storefront.services.pages import StorefrontPages
from storefront_cli import __version__

logger = logging.getLogger(__name__)

COMMANDS = ("render", "templates", "search", "fetch", "push", "page")

# Options that take a value, mapped to their result key.
VALUE_OPTIONS = {
    "--api-url": "api_url",
    "--token": "token",
    "--mode": "mode",
    "--products": "products",
    "--out": "out",
    "--title": "title",
    "--store-name": "store_name",
    "--category": "category",
    "--page": "page_id",
    "--template": "template_id",
}


def print_help():
    """Print help message."""
    print(f"""
Storefront CLI v{__version__}

Usage:
  storefront [options] <command> [arguments]

Commands:
  render FILE               Render a layout JSON file to an HTML page
  templates                 List the block types a page can use
  search TERM               Search block types by name or description
  fetch STORE_ID            Print a store (or page) layout as JSON
  push STORE_ID FILE        Save a layout JSON file as the store (or page) layout
  page SLUG [PAGE_SLUG]     Render a public store page from the API

Options:
  --mode MODE               public (default) or edit-preview
  --products FILE           Product catalog JSON for render
  --title TEXT              Page title for render
  --store-name NAME         Store name for render
  --category NAME           Limit templates/search to one category
  --page ID                 Page id for fetch/push (default: store layout)
  --template ID             Template id used when no layout is saved (fetch)
  --out FILE                Write output to FILE instead of stdout
  --api-url URL             Override API endpoint
  --token TOKEN             API bearer token
  -h, --help                Show this help
  -v, --version             Show version

Environment:
  STOREFRONT_API_URL        API endpoint (same as --api-url)
  STOREFRONT_API_TOKEN      API bearer token (same as --token)
  LOG_LEVEL                 Logging level (default: INFO)

Examples:
  storefront render layout.json --products catalog.json --out index.html
  storefront search hero --category hero
  storefront fetch 12 --page 3 > about.json
  storefront push 12 home.json
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None
        positionals: list[str]
        one key per VALUE_OPTIONS entry (str | None)
        show_help: bool
        show_version: bool
    """
    result: dict = {
        "command": None,
        "positionals": [],
        "show_help": False,
        "show_version": False,
    }
    for key in VALUE_OPTIONS.values():
        result[key] = None

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in VALUE_OPTIONS:
            if i + 1 < len(args):
                result[VALUE_OPTIONS[arg]] = args[i + 1]
                i += 1
            else:
                print(f"Error: {arg} requires a value")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'storefront --help' for usage.")
            sys.exit(1)
        elif result["command"] is None:
            if arg not in COMMANDS:
                print(f"Unknown command: {arg}")
                print("Run 'storefront --help' for usage.")
                sys.exit(1)
            result["command"] = arg
        else:
            result["positionals"].append(arg)

        i += 1

    if result["mode"] not in (None, PUBLIC, EDIT_PREVIEW):
        print(f"Error: --mode must be {PUBLIC} or {EDIT_PREVIEW}")
        sys.exit(1)

    return result


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, config.settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def read_json(path: str):
    return json.loads(Path(path).read_text())


def emit(text: str, out: str | None):
    if out:
        Path(out).write_text(text)
        print(f"Wrote {out}", file=sys.stderr)
    else:
        print(text)


def require(args: dict, count: int, usage: str) -> list[str]:
    if len(args["positionals"]) < count:
        print(f"Usage: storefront {usage}")
        sys.exit(1)
    return args["positionals"]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_render(args: dict) -> int:
    """Render a layout file offline."""
    (path, *_) = require(args, 1, "render FILE")
    try:
        raw = read_json(path)
    except (OSError, ValueError) as e:
        print(f"Error: could not read {path}: {e}")
        return 1

    layout = parse_layout(raw)
    if layout is None:
        print(f"Error: {path} is not a layout object")
        return 1

    products = []
    if args["products"]:
        try:
            products = parse_catalog(read_json(args["products"]))
        except (OSError, ValueError) as e:
            print(f"Error: could not read {args['products']}: {e}")
            return 1

    ctx = RenderContext(
        mode=args["mode"] or PUBLIC,
        store_theme=layout.theme,
        products=products,
        store_name=args["store_name"] or "Our Store",
    )
    html = render_page(layout.components, ctx, RenderOptions(title=args["title"]))
    logger.info("cli: rendered %d components from %s", len(layout.components), path)
    emit(html, args["out"])
    return 0


def cmd_templates(args: dict) -> int:
    """List registry templates grouped by category."""
    category = args["category"] or registry.ALL_CATEGORY
    if category != registry.ALL_CATEGORY and category not in registry.CATEGORIES:
        print(f"Unknown category: {category}")
        print(f"Categories: {', '.join(registry.CATEGORIES)}")
        return 1

    templates = registry.find_by_category(category)
    for cat in registry.CATEGORIES:
        group = [t for t in templates if t.category == cat]
        if not group:
            continue
        print(f"{cat} ({len(group)})")
        for t in group:
            print(f"  {t.id:<20} {t.name} - {t.description}")
    return 0


def cmd_search(args: dict) -> int:
    (term, *_) = require(args, 1, "search TERM")
    matches = registry.search(term, args["category"] or registry.ALL_CATEGORY)
    if not matches:
        print(f"No block types match '{term}'")
        return 1
    for t in matches:
        print(f"{t.id:<20} [{t.category}] {t.name}")
    return 0


def make_api(args: dict) -> StorefrontApi:
    return StorefrontApi(api_url=args["api_url"], token=args["token"])


async def fetch_layout(api: StorefrontApi, args: dict) -> int:
    (store_id, *_) = require(args, 1, "fetch STORE_ID")
    scope = LayoutScope(store_id=store_id, page_id=args["page_id"])
    notifier = MemoryNotifier()
    assembly = LayoutAssembly(ApiLayoutStorage(api, notifier=notifier))

    layout = await assembly.load_layout(scope, template_id=args["template_id"])
    for message in notifier.errors:
        print(f"Warning: {message}", file=sys.stderr)
    print(f"Loaded {scope.key} from {layout.loaded_from}", file=sys.stderr)
    emit(json.dumps(layout.to_dict(), indent=2), args["out"])
    return 0


async def push_layout(api: StorefrontApi, args: dict) -> int:
    (store_id, path, *_) = require(args, 2, "push STORE_ID FILE")
    try:
        layout = parse_layout(read_json(path))
    except (OSError, ValueError) as e:
        print(f"Error: could not read {path}: {e}")
        return 1
    if layout is None:
        print(f"Error: {path} is not a layout object")
        return 1

    scope = LayoutScope(store_id=store_id, page_id=args["page_id"])
    assembly = LayoutAssembly(ApiLayoutStorage(api))
    try:
        saved = await assembly.save_layout(scope, layout)
    except PendingAssetError as e:
        print(f"Error: {e}")
        return 1
    except LayoutSaveError as e:
        print(f"Error: {e}")
        return 1

    print(f"Saved {len(saved.components)} components to {scope.key}")
    return 0


async def render_public_page(api: StorefrontApi, args: dict) -> int:
    (slug, *rest) = require(args, 1, "page SLUG [PAGE_SLUG]")
    notifier = MemoryNotifier()
    pages = StorefrontPages(api, notifier=notifier)
    html = await pages.render_page(slug, rest[0]) if rest else await pages.render_home(slug)
    for message in notifier.errors:
        print(f"Warning: {message}", file=sys.stderr)
    emit(html, args["out"])
    return 0


async def run_api_command(args: dict) -> int:
    handlers = {"fetch": fetch_layout, "push": push_layout, "page": render_public_page}
    try:
        api = make_api(args)
    except RuntimeError as e:
        print(f"Error: {e}")
        return 1
    try:
        return await handlers[args["command"]](api, args)
    except ApiError as e:
        print(f"Error: {e}")
        return 1
    finally:
        await api.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    # Handle help and version first
    if args["show_help"]:
        print_help()
        return 0

    if args["show_version"]:
        print(f"storefront-cli {__version__}")
        return 0

    if args["command"] is None:
        print_help()
        return 1

    configure_logging()

    if args["command"] == "render":
        return cmd_render(args)
    if args["command"] == "templates":
        return cmd_templates(args)
    if args["command"] == "search":
        return cmd_search(args)
    return asyncio.run(run_api_command(args))


if __name__ == "__main__":
    sys.exit(main())
