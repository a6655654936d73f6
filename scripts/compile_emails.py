#!/usr/bin/env python3
"""Build the runtime email templates.

Source templates (``app/templates/emails/*.j2``) are rendered with
placeholder values, CSS-inlined and minified into ``compiled/*.html``; the
placeholders are then turned back into Jinja2 expressions so the app can fill
them at send time.

    python scripts/compile_emails.py          # rebuild compiled/
    python scripts/compile_emails.py --check  # fail if compiled/ is stale
"""

import argparse
import sys
from pathlib import Path

import css_inline
import minify_html
from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).parent.parent / "app" / "templates" / "emails"
OUTPUT_DIR = TEMPLATES_DIR / "compiled"

# Source template -> variables filled in by app.core.email at send time
TEMPLATES = {
    "invitation.j2": ["name", "role", "invitation_url"],
}

# Minifiers keep quotes around URL-looking attribute values
PLACEHOLDER_PREFIX = "https://jinja-placeholder.local/var/"


def restore_variables(html: str, variables: list[str]) -> str:
    """Swap placeholder URLs back for ``{{ var }}`` expressions."""
    for var in variables:
        placeholder = f"{PLACEHOLDER_PREFIX}{var}"
        expression = f"{{{{ {var} }}}}"
        # The minifier may drop quotes around attribute values
        html = html.replace(f"={placeholder}>", f'="{expression}">')
        html = html.replace(f"={placeholder} ", f'="{expression}" ')
        html = html.replace(f'"{placeholder}"', f'"{expression}"')
        html = html.replace(placeholder, expression)
    return html


def compile_template(env: Environment, template_name: str, variables: list[str]) -> str:
    context = {var: f"{PLACEHOLDER_PREFIX}{var}" for var in variables}
    html = env.get_template(template_name).render(**context)
    html = css_inline.inline(html)
    html = minify_html.minify(html, minify_css=True)
    return restore_variables(html, variables)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--check",
        action="store_true",
        help="exit non-zero when a compiled template is missing or outdated",
    )
    args = parser.parse_args(argv)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    OUTPUT_DIR.mkdir(exist_ok=True)

    stale = []
    for template_name, variables in TEMPLATES.items():
        if not (TEMPLATES_DIR / template_name).exists():
            print(f"  ✗ {template_name} (not found)")
            stale.append(template_name)
            continue

        html = compile_template(env, template_name, variables)
        output_path = OUTPUT_DIR / (Path(template_name).stem + ".html")
        if args.check:
            current = output_path.read_text("utf-8") if output_path.exists() else ""
            if current != html:
                print(f"  ✗ {output_path.name} is out of date")
                stale.append(template_name)
            continue

        output_path.write_text(html, encoding="utf-8")
        print(f"  ✓ {template_name} -> {output_path.name}")

    return 1 if stale else 0


if __name__ == "__main__":
    sys.exit(main())
