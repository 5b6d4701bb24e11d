"""Command line front-end for the spouse showcase.

Run: ``spouse-client --base-url http://localhost:3000 list``
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from client.api_client import SpouseApiClient
from client.form import SubmissionForm, render_page
from client.gallery import ERRORED, Gallery
from client.notifications import ToastQueue


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spouse-client", description=__doc__)
    parser.add_argument("--base-url", default="http://localhost:3000", help="Server root URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Print every submitted spouse")

    add = sub.add_parser("add", help="Submit a spouse")
    add.add_argument("--user", required=True, help="Your name")
    add.add_argument("--spouse", required=True, help="Spouse name")
    add.add_argument("--image", required=True, type=Path, help="Image file to upload")

    gallery = sub.add_parser("gallery", help="Write the gallery page as HTML")
    gallery.add_argument("--out", required=True, type=Path, help="Output HTML file")
    return parser


async def _run(args: argparse.Namespace) -> int:
    gallery = Gallery()
    async with SpouseApiClient(args.base_url) as api:
        if args.command == "add":
            form = SubmissionForm()
            form.user_name = args.user
            form.spouse_name = args.spouse
            await form.choose_image(args.image)
            toasts = ToastQueue()
            created = await form.submit(api, gallery, toasts)
            for field, message in form.field_errors.items():
                print(f"{field}: {message}", file=sys.stderr)
            for toast in toasts.active():
                print(f"{toast.title} {toast.description}")
            return 0 if created else 1

        await gallery.refresh(api)
        if gallery.state == ERRORED:
            print(f"Error: {gallery.error}", file=sys.stderr)
            return 1

        if args.command == "list":
            for spouse in gallery.spouses:
                print(f"{spouse.id}\t{spouse.spouse_name}\tadded by {spouse.user_name}")
        else:
            args.out.write_text(render_page(SubmissionForm(), gallery), encoding="utf-8")
            print(f"Wrote {len(gallery.spouses)} spouses to {args.out}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")
    args = _build_parser().parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
