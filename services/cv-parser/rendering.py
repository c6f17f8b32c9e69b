"""HTML rendering for the upload forms and parse results."""

from html import escape
from typing import Any

from models import ExtractionResult

PRICING_URL = "https://platform.openai.com/docs/pricing?latest-pricing=batch"

DEBUG_MODELS = ("gpt-5-mini", "gpt-5", "gpt-4o-mini", "gpt-4o", "gpt-4.1", "gpt-4.1-mini")

_STYLE = """
  :root { color-scheme: light dark; }
  body { font-family: ui-sans-serif, -apple-system, system-ui, Segoe UI, Roboto, Ubuntu, Cantarell, Noto Sans, Helvetica, Arial; margin: 2rem; line-height: 1.5; }
  .container { max-width: 980px; margin: 0 auto; }
  header { margin-bottom: 1.5rem; }
  h1 { font-size: 1.5rem; margin: 0 0 .75rem; }
  form { display: grid; gap: .75rem; padding: 1rem; border: 1px solid #9993; border-radius: 8px; }
  input[type=file] { padding: .5rem; border: 1px dashed #9996; border-radius: 6px; }
  button { padding: .6rem 1rem; border-radius: 6px; border: 1px solid #8886; cursor: pointer; }
  .grid { display: grid; grid-template-columns: 1fr; gap: 1rem; }
  @media (min-width: 900px) { .grid { grid-template-columns: 1fr 1fr; } }
  pre { white-space: pre-wrap; word-wrap: break-word; padding: 1rem; border: 1px solid #9993; border-radius: 8px; background: #00000008; }
  .kv { margin-left: 1rem; }
  .k { font-weight: 600; }
  .muted { color: #666; font-size: .9rem; }
"""


def layout(title: str, body: str) -> str:
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
  </head>
  <body>
    <div class="container">
      <header>
        <h1>CV Parser Demo</h1>
        <p class="muted">Upload and parse a PDF CV.</p>
      </header>
      {body}
    </div>
  </body>
</html>"""


def error_page(message: str) -> str:
    return layout("Error", f"<p>{escape(message)}</p>")


def upload_form() -> str:
    return """
    <form method="POST" action="/parse" enctype="multipart/form-data">
      <label><strong>PDF CV</strong> (only .pdf)</label>
      <input type="file" name="file" accept="application/pdf,.pdf" required />

      <input type="hidden" name="model" value="gpt-4.1-mini" />
      <input type="hidden" name="reasoning_effort" value="medium" />
      <input type="hidden" name="verbosity" value="medium" />
      <input type="hidden" name="schema_type" value="separate" />

      <button type="submit">Upload &amp; Parse</button>
    </form>
    """


def _select(name: str, options: list[tuple[str, str]], selected: str) -> str:
    items = "".join(
        f'<option value="{value}"{" selected" if value == selected else ""}>{label}</option>'
        for value, label in options
    )
    return f'<select name="{name}" id="{name}">{items}</select>'


def debug_form() -> str:
    models = _select("model", [(m, m) for m in DEBUG_MODELS], "gpt-4.1-mini")
    efforts = _select(
        "reasoning_effort",
        [("minimal", "Minimal"), ("low", "Low"), ("medium", "Medium"), ("high", "High")],
        "low",
    )
    verbosity = _select("verbosity", [("low", "Low"), ("medium", "Medium"), ("high", "High")], "medium")
    schemas = _select("schema_type", [("complete", "Complete"), ("separate", "Separate")], "separate")
    return f"""
    <form method="POST" action="/parse" enctype="multipart/form-data">
      <label><strong>PDF CV</strong> (only .pdf)</label>
      <input type="file" name="file" accept="application/pdf,.pdf" required />

      <input type="hidden" name="debug" value="true" />

      <label><strong>Model:</strong></label>
      {models}
      <sub>Pricing information can be found <a href="{PRICING_URL}" target="_blank" rel="noopener noreferrer">here</a></sub>

      <label><strong>Reasoning Effort:</strong></label>
      {efforts}

      <label><strong>Verbosity:</strong></label>
      {verbosity}

      <label><strong>Schema:</strong></label>
      {schemas}

      <button type="submit">Upload &amp; Parse</button>
    </form>
    """


def render_obj(obj: Any) -> str:
    """Render a parsed JSON value as nested key/value HTML."""
    if obj is None:
        return "<em>null</em>"
    if isinstance(obj, list):
        if not obj:
            return "<span>[]</span>"
        rows = "".join(
            f'<div><span class="k">[{i}]</span>: {render_obj(v)}</div>' for i, v in enumerate(obj)
        )
        return f'<div class="kv">{rows}</div>'
    if isinstance(obj, dict):
        if not obj:
            return "<span>{}</span>"
        rows = "".join(
            f'<div><span class="k">{escape(str(k))}</span>: {render_obj(v)}</div>' for k, v in obj.items()
        )
        return f'<div class="kv">{rows}</div>'
    if isinstance(obj, bool):
        return f"<span>{'true' if obj else 'false'}</span>"
    return f"<span>{escape(str(obj))}</span>"


def usage_block(result: ExtractionResult, model: str, reasoning_effort: str) -> str:
    return f"""<h2>Usage &amp; Cost</h2>
    <p class="muted">
      Using Model: {escape(model)}<br />
      Reasoning Effort: {escape(reasoning_effort)}<br />
      Input tokens: {result.input_tokens:,} | Output tokens: {result.output_tokens:,}<br />
      Estimated cost: ${result.total_cost:.6f} (rates: ${result.input_price_per_million:.3f}/M input, ${result.output_price_per_million:.3f}/M output)
    </p>"""


def result_page(result: ExtractionResult, usage: str = "") -> str:
    formatted = (
        render_obj(result.parsed_record)
        if result.parsed_record is not None
        else "<p>Unable to parse JSON response.</p>"
    )
    body = f"""{usage}
    <p><a href="/">&#8592; Upload another PDF</a></p>
    <h2>Parsed JSON</h2>
    <div class="grid">
      <div>
        <h3>Raw</h3>
        <pre>{escape(result.raw_text, quote=False)}</pre>
      </div>
      <div>
        <h3>Formatted</h3>
        {formatted}
      </div>
    </div>
    """
    return layout("Parsed CV", body)
