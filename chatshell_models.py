import requests

import chatshell_config
from chatshell_errors import CatalogError


def list_models(base_url=None, timeout=None):
    url = chatshell_config.endpoint(base_url or chatshell_config.OLLAMA_URL, "api/tags")
    try:
        response = requests.get(url, timeout=timeout or chatshell_config.CONNECT_TIMEOUT)
    except requests.RequestException as e:
        raise CatalogError(f"Error contacting {url}: {e}") from e
    if not response.ok:
        raise CatalogError(f"Unexpected response from /api/tags: {response.status_code} {response.reason}")
    try:
        data = response.json()
    except ValueError as e:
        raise CatalogError(f"Error parsing model list JSON: {e}") from e

    models = data.get("models") if isinstance(data, dict) else None
    if not isinstance(models, list):
        raise CatalogError("Model list response has no 'models' array")
    return [m["name"] for m in models if isinstance(m, dict) and isinstance(m.get("name"), str)]


def select_model(names, console, input_fn=None):
    """Ask the user to pick one of ``names`` by number; None on EOF or no models."""
    input_fn = input_fn or input
    if not names:
        console.plain()
        console.error("-------------------------------------------------")
        console.error("Warning! You have no Ollama models downloaded.")
        console.info("You can download one by opening ANOTHER terminal and running:")
        console.prompt("  ollama pull llama3", end="\n")
        console.error("-------------------------------------------------")
        return None

    console.plain()
    console.info("Ollama models available locally:")
    for i, name in enumerate(names, start=1):
        console.plain(f"{i}. ", end="")
        console.model(name)

    while True:
        console.prompt(f"Choose a model (1-{len(names)}): ")
        try:
            choice = input_fn().strip()
        except EOFError:
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(names):
            return names[int(choice) - 1]
        console.error("Invalid selection. Please enter a number from the list.")
