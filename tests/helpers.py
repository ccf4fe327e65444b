#!/usr/bin/env python3
"""
Shared helpers for the test scripts: small builders for reference-doc markup
and a runner so every test module can be executed directly.
"""

import os
import sys
import traceback

# Allow "python tests/test_x.py" from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bs4 import BeautifulSoup  # noqa: E402


def soup_of(markup: str):
    """First element of a parsed markup fragment."""
    return BeautifulSoup(markup, "html.parser").find(True)


def field_row(type_text, name, optional=False, description="Description.", row_id=None):
    id_attr = f' id="{row_id}"' if row_id else ""
    name_cell = f'<span class="optional">optional</span> {name}' if optional else name
    desc_cell = f"<td>{description}</td>" if description is not None else ""
    return f"<tr{id_attr}><td>{type_text}</td><td>{name_cell}</td>{desc_cell}</tr>"


def arg_row(type_text, name, optional=False, description="Description."):
    return field_row(type_text, name, optional, description, row_id=f"property-{name}")


def callback_row(name, inner_rows="", optional=False):
    nested = f"<table><tbody>{inner_rows}</tbody></table>" if inner_rows else "Called when done."
    return arg_row("function", name, optional, description=nested)


def method_div(name, rows="", title="h3", title_id=None):
    id_attr = f' id="{title_id}"' if title_id else ""
    table = f"<table><tbody>{rows}</tbody></table>" if rows else ""
    return (
        f"<div><{title}{id_attr}>{name}</{title}>"
        f'<div class="description"><p>Does {name}.</p>{table}</div></div>'
    )


def event_div(name, listener_rows=""):
    table = f"<table><tbody>{listener_rows}</tbody></table>" if listener_rows else ""
    return (
        f'<div><h3 id="event-{name}">{name}</h3><div class="description">'
        f'<div><h4>addListener</h4><div class="description">{table}</div></div>'
        f"</div></div>"
    )


def header_row(text):
    return f'<tr><th colspan="3">{text}</th></tr>'


def member_row(body):
    return f"<tr><td>{body}</td></tr>"


def inner_event_body(name, listener_rows=""):
    table = f"<table><tbody>{listener_rows}</tbody></table>" if listener_rows else ""
    return (
        f'<div><div class="summary"><code class="prettyprint">{name}.addListener(function callback)</code></div>'
        f'<h4>addListener</h4><div class="description">{table}</div></div>'
    )


def type_div(name, rows=""):
    table = f"<table><tbody>{rows}</tbody></table>" if rows else ""
    return f'<div><h3 id="type-{name}">{name}</h3><div class="description"><p>{name}.</p></div>{table}</div>'


def page(*sections):
    return f'<html><body><div class="api-reference">{"".join(sections)}</div></body></html>'


def run_module_tests(namespace, title):
    """Run every test_* function in ``namespace``; exit non-zero on failure."""
    print(f"🧪 {title}")
    print("=" * 50)
    tests = [(name, fn) for name, fn in namespace.items() if name.startswith("test_") and callable(fn)]
    failed = 0
    for name, fn in tests:
        try:
            fn()
            print(f"   ✅ {name}")
        except Exception as e:
            failed += 1
            print(f"   ❌ {name}: {e}")
            traceback.print_exc()
    print(f"\n📊 {len(tests) - failed}/{len(tests)} passed")
    sys.exit(1 if failed else 0)
