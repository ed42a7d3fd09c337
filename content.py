"""Static page text and user records served by the site routes."""

HOME: dict[str, object] = {
    "title": "Welcome to My Custom HTTP Web Server 🌐",
    "description": (
        "This is a minimalistic web server built from scratch on top of "
        "Python's socket and selectors modules. 🦋"
    ),
    "links": [
        {"text": "About", "url": "/about"},
        {"text": "API Users", "url": "/api/users"},
    ],
}

ABOUT: dict[str, str] = {
    "title": "About This Project",
    "content": """
      <h1>About My Custom HTTP Web Server 🌐</h1>

      <p>This project is a small, custom-built HTTP web server made to learn how web servers work from the ground up.</p>

      <h2>Why I Built This 🛠️</h2>

      <p>I wanted to know what happens behind the scenes when you type a web address and hit enter. Here's what I aimed to learn:</p>

      <ul>
        <li>How HTTP really works - the language of the web</li>
        <li>How to use raw sockets for networking at a low level</li>
        <li>How web servers handle different web addresses (URLs)</li>
        <li>How a single event loop can serve many users at once</li>
      </ul>

      <h2>How It Works ⚙️</h2>

      <p>The server opens a TCP socket and watches it with a selector. Here's what happens when you visit a page:</p>

      <ol>
        <li>The server waits for a computer (like your web browser) to connect</li>
        <li>When a connection comes in, the server reads what the browser is asking for</li>
        <li>The server looks at the method and address to pick a handler</li>
        <li>The handler prepares the right information (like the text of a webpage)</li>
        <li>The server sends the response back and hangs up</li>
      </ol>

      <h2>The Parts of the Server 🧩</h2>

      <ul>
        <li><strong>server.py</strong>: Opens the listening socket and runs the event loop.</li>
        <li><strong>connection_handler.py</strong>: Serves the one request that arrives on a connection.</li>
        <li><strong>request.py</strong>: Turns raw bytes into a structured request.</li>
        <li><strong>response.py</strong>: Turns a structured response back into bytes.</li>
        <li><strong>router.py</strong>: Decides which handler answers which address.</li>
      </ul>

      <h2>What's Next? ⏭️</h2>

      <ul>
        <li>Reading request bodies that arrive in more than one piece</li>
        <li>Keeping connections open for more than one request</li>
        <li>Serving files (like images or CSS) along with web pages</li>
      </ul>

      <p>This server isn't ready for real-world websites, but it's an excellent tool for learning.</p>
    """,
}

USERS: list[dict[str, object]] = [
    {"id": 1, "name": "Alice Johnson", "email": "alice@example.com", "role": "Developer"},
    {"id": 2, "name": "Bob Smith", "email": "bob@example.com", "role": "Designer"},
    {"id": 3, "name": "Charlie Brown", "email": "charlie@example.com", "role": "Manager"},
    {"id": 4, "name": "Diana Ross", "email": "diana@example.com", "role": "DevOps"},
    {"id": 5, "name": "Ethan Hunt", "email": "ethan@example.com", "role": "Tester"},
]

PAGE_TEMPLATE = """
  <!DOCTYPE html>
  <html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Custom Web Server</title>
    <style>
      body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 20px; }}
      h1 {{ color: #2c3e50; }}
      a {{ color: #3498db; text-decoration: none; }}
      a:hover {{ text-decoration: underline; }}
    </style>
  </head>
  <body>
    {body}
  </body>
  </html>
"""


def create_html_page(body: str) -> str:
    return PAGE_TEMPLATE.format(body=body)
