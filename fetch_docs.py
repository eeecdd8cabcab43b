#!/usr/bin/env python3
"""Style Guide Fetcher for Agentic Editors

Pulls the Vue style guide and testing guide from GitBook (via llms.txt),
rewrites site links to relative paths, and saves each page as markdown with
editor-specific frontmatter so Kiro / Windsurf / Trae pick them up as rules.

Usage:
    python3 fetch_docs.py                    # docs/
    python3 fetch_docs.py --editor=kiro      # .kiro/steering/
    python3 fetch_docs.py --editor=windsurf  # .windsurf/rules/
    python3 fetch_docs.py --editor=trae      # .trae/rules/

Library usage:
    from fetch_docs import extract_markdown_links, add_frontmatter

    links = extract_markdown_links(index_text)
    text = add_frontmatter(raw_markdown, links[0].title, editor="kiro")
"""

import argparse
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import NamedTuple, Optional

import requests
import yaml


BASE_URL = "https://fewangsit.gitbook.io"
INDEX_URL = f"{BASE_URL}/vue/llms.txt"
DOCS_PREFIX = "/vue/docs/"
GUIDE_SEGMENTS = ("style-guide", "testing-guide")
USER_AGENT = "fetch-docs/1.0 (+https://fewangsit.gitbook.io/vue)"

# Output lands next to this script, not the caller's cwd
SCRIPT_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class EditorProfile:
    """Frontmatter fields and output location for one agentic editor."""
    name: str
    label: str
    fields: tuple              # ordered (key, value) pairs, emitted verbatim
    output_dir: str            # relative to the output root

    @property
    def frontmatter(self) -> dict:
        return dict(self.fields)


EDITOR_PROFILES = MappingProxyType({
    "kiro": EditorProfile(
        name="kiro",
        label="Kiro editor",
        fields=(("inclusion", "always"),),
        output_dir=".kiro/steering",
    ),
    "windsurf": EditorProfile(
        name="windsurf",
        label="Windsurf editor",
        fields=(("trigger", "always-on"),),
        output_dir=".windsurf/rules",
    ),
    "trae": EditorProfile(
        name="trae",
        label="Trae editor",
        fields=(("alwaysApply", True),),
        output_dir=".trae/rules",
    ),
    "default": EditorProfile(
        name="default",
        label="Generic configuration",
        fields=(("inclusion", "always"),),
        output_dir="docs",
    ),
})


class DocLink(NamedTuple):
    """A qualifying link found in the index."""
    title: str
    path: str


class FetchError(Exception):
    """Non-2xx response or connection failure while fetching a URL."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


# --- Patterns ---

GUIDE_LINK = re.compile(
    r'\[([^\]]+)\]\(([^)]*/(?:' + '|'.join(GUIDE_SEGMENTS) + r')/[^)]+)\)'
)

# Start of text only; non-greedy so body rules (---) survive
FRONTMATTER_BLOCK = re.compile(r'^---.*?---\n', re.DOTALL)

ROOT_RELATIVE_LINK = re.compile(
    r'\[([^\]]+)\]\(' + re.escape(DOCS_PREFIX) + r'([^)]+)\)'
)
FULL_URL_LINK = re.compile(
    r'\[([^\]]+)\]\(' + re.escape(BASE_URL + DOCS_PREFIX) + r'([^)]+)\)'
)
STYLE_GUIDE_ROOT = re.compile(r'^style-guide/')


def get_editor_profile(editor: str = "default", profiles=EDITOR_PROFILES) -> EditorProfile:
    """Look up an editor profile, falling back to the default one."""
    return profiles.get(editor) or profiles["default"]


def fetch_url(url: str) -> str:
    """Fetch a URL and return the body as text.

    One attempt, no timeout. Raises FetchError on any non-2xx status or
    transport failure (DNS, refused, reset).
    """
    try:
        # 3xx is a failure, not a second request
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, allow_redirects=False)
    except requests.RequestException as e:
        raise FetchError(url, str(e)) from e

    if not 200 <= response.status_code < 300:
        raise FetchError(
            url,
            f"HTTP {response.status_code}: {response.reason}",
            status_code=response.status_code,
        )

    # GitBook serves text/markdown without a charset; requests would guess latin-1
    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"
    return response.text


def extract_markdown_links(content: str) -> list:
    """Extract style-guide / testing-guide links from llms.txt, in source order.

    At most one link per line; links wrapped across lines are not matched.
    """
    links = []
    for line in content.split("\n"):
        match = GUIDE_LINK.search(line)
        if match:
            links.append(DocLink(title=match.group(1), path=match.group(2)))
    return links


def path_to_local_file(url_path: str) -> str:
    """Map /vue/docs/style-guide/x.md -> style-guide/x.md"""
    if url_path.startswith(DOCS_PREFIX):
        return url_path[len(DOCS_PREFIX):]
    return url_path


def output_path_for(link: DocLink, profile: EditorProfile, root: Optional[Path] = None) -> Path:
    if root is None:
        root = SCRIPT_DIR
    # Leading / would make pathlib discard root and output_dir
    return Path(root) / profile.output_dir / path_to_local_file(link.path).lstrip("/")


def build_frontmatter(profile: EditorProfile) -> str:
    """Build the YAML header block for an editor profile.

    One `key: value` line per field, in profile order. Values go through
    yaml.safe_dump, so a string that would load as another type is quoted
    (`"1"` -> `'1'`) and booleans render as `true`/`false`. Lines are never
    wrapped.
    """
    body = ""
    if profile.fields:
        body = yaml.safe_dump(
            profile.frontmatter,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
    return f"---\n{body}---\n"


def strip_frontmatter(content: str) -> str:
    return FRONTMATTER_BLOCK.sub("", content, count=1)


def _relative_link(match) -> str:
    text, path = match.group(1), match.group(2)
    return f"[{text}]({STYLE_GUIDE_ROOT.sub('./', path)})"


def _relative_url_link(match) -> str:
    text, path = match.group(1), match.group(2)
    if not path.endswith(".md"):
        path += ".md"
    return f"[{text}]({STYLE_GUIDE_ROOT.sub('./', path)})"


def rewrite_links(content: str) -> str:
    """Rewrite site links to paths relative to the style-guide root.

    [x](/vue/docs/style-guide/a/b.md)                     -> [x](./a/b.md)
    [x](https://fewangsit.gitbook.io/vue/docs/style-guide/a/b) -> [x](./a/b.md)

    Only the style-guide prefix is collapsed; testing-guide links keep theirs.
    """
    content = ROOT_RELATIVE_LINK.sub(_relative_link, content)
    return FULL_URL_LINK.sub(_relative_url_link, content)


def add_frontmatter(content: str, title: str, editor: str = "default", profiles=EDITOR_PROFILES) -> str:
    """Replace any existing frontmatter with the editor's and relativize links.

    `title` is accepted alongside the editor for symmetry with the link record;
    it is not written into the header.
    """
    profile = get_editor_profile(editor, profiles)
    return build_frontmatter(profile) + rewrite_links(strip_frontmatter(content))


def fetch_documentation(editor: str = "default", profiles=EDITOR_PROFILES, root: Optional[Path] = None) -> list:
    """Fetch every guide page listed in the index and write it to disk.

    A failed index fetch raises FetchError. Failures on individual pages are
    reported and skipped. Returns the paths written, in index order.
    """
    profile = get_editor_profile(editor, profiles)

    print("Fetching documentation index...")
    index_content = fetch_url(INDEX_URL)

    links = extract_markdown_links(index_content)
    print(f"Found {len(links)} documentation pages to fetch")
    print(f"Output directory: {profile.output_dir}")

    saved = []
    for link in links:
        try:
            print(f"Fetching: {link.title} from {link.path}")
            content = fetch_url(f"{BASE_URL}{link.path}")

            local_path = path_to_local_file(link.path).lstrip("/")
            full_path = output_path_for(link, profile, root)
            full_path.parent.mkdir(parents=True, exist_ok=True)

            full_path.write_text(
                add_frontmatter(content, link.title, profile.name, profiles),
                encoding="utf-8",
            )
            saved.append(full_path)
            print(f"✓ Saved: {profile.output_dir}/{local_path}")
        except Exception as e:
            print(f"✗ Failed to fetch {link.title}: {e}", file=sys.stderr)

    print("\nDocumentation fetch completed!")
    return saved


def _editor_help(profiles) -> str:
    lines = ["Available editors:"]
    for key, profile in profiles.items():
        fields = ", ".join(build_frontmatter(profile).splitlines()[1:-1])
        lines.append(f"  {key:<10} - {profile.label} ({fields}, output: {profile.output_dir}/)")
    lines.append("")
    lines.append("Examples:")
    lines.append("  python3 fetch_docs.py")
    for key in profiles:
        if key != "default":
            lines.append(f"  python3 fetch_docs.py --editor={key}")
    return "\n".join(lines)


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fetch the Vue style and testing guides as editor rule files",
        epilog=_editor_help(EDITOR_PROFILES),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--editor",
        default="default",
        metavar="EDITOR",
        help="Set agentic editor for metadata configuration (default: default)",
    )
    args = parser.parse_args(argv)

    editor = args.editor or "default"

    print(f"Using agentic editor: {editor}")
    if editor not in EDITOR_PROFILES:
        print(f"⚠️  Unknown editor '{editor}', using default configuration")

    try:
        fetch_documentation(editor, EDITOR_PROFILES)
    except FetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
