import os

# --- Server ---
OLLAMA_URL = os.getenv("CHATSHELL_OLLAMA_URL", "http://localhost:11434/")
READY_TIMEOUT = float(os.getenv("CHATSHELL_READY_TIMEOUT", "15"))
POLL_INTERVAL = float(os.getenv("CHATSHELL_POLL_INTERVAL", "0.5"))

# --- Requests ---
CONNECT_TIMEOUT = float(os.getenv("CHATSHELL_CONNECT_TIMEOUT", "5"))
# Longest silence tolerated between two streamed lines.
READ_TIMEOUT = float(os.getenv("CHATSHELL_READ_TIMEOUT", "300"))

# --- Files ---
LOG_FILE = os.getenv("CHATSHELL_LOG_FILE", "history.log")
LOGOS_FILE = os.getenv("CHATSHELL_LOGOS_FILE", "logos.json")

SYSTEM_PROMPT_TEMPLATE = """You are a helpful assistant. The model you are running is {model}. You are NOT ChatGPT.
You are talking to a user in a terminal.
When the user asks you to create a file, format your answer using this special tag:
<file:name.ext>
[FILE CONTENT HERE]
</file>
ONLY use this format to create files."""


def endpoint(base_url, path):
    return base_url.rstrip("/") + "/" + path.lstrip("/")
