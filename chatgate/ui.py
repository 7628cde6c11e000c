"""
Browser form served on GET /.

The page posts the form back to its own URL (query string included, so the
secret travels with it) and shows the plain-text reply.
"""

from chatgate.agent.llm import ModelSelector

PAGE_TITLE = "Chatbot"

_MODEL_LABELS: dict[ModelSelector, str] = {
    ModelSelector.CLAUDE: "Claude Opus 4.1",
    ModelSelector.DEEPSEEK: "DeepSeek v3.1",
}

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <style>
    body {{ background-color: black; color: white; font-family: Arial; }}
    textarea {{ width: 100%; height: 200px; resize: vertical; overflow-y: auto; background: #333; color: white; border: 1px solid #666; }}
    select, button {{ background: #333; color: white; border: 1px solid #666; }}
    #response {{ margin-top: 20px; padding: 10px; background: #222; border: 1px solid #666; white-space: pre-wrap; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <form id="chatForm">
    <select name="model">
{options}
    </select>
    <br><br>
    <textarea name="query" maxlength="{max_length}" placeholder="Enter your query..."></textarea>
    <br>
    <button type="submit">Send</button>
  </form>
  <div id="response"></div>
  <script>
    document.getElementById('chatForm').addEventListener('submit', async e => {{
      e.preventDefault();
      const formData = new FormData(e.target);
      const response = await fetch(location.href, {{ method: 'POST', body: formData }});
      const text = await response.text();
      document.getElementById('response').innerText = text;
    }});
  </script>
</body>
</html>
"""


def render_form_page(max_length: int) -> str:
    options = "\n".join(
        f'      <option value="{selector.value}">{label}</option>'
        for selector, label in _MODEL_LABELS.items()
    )
    return _PAGE_TEMPLATE.format(title=PAGE_TITLE, options=options, max_length=max_length)
