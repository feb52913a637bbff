import argparse
import sys

import chatshell_config
from chatshell_display import Console, clear_screen, load_logos, show_logo
from chatshell_errors import ChatShellError, ServerNotReady, TurnFailed
from chatshell_files import FileWritten, extract_and_write
from chatshell_log import log_event
from chatshell_models import list_models, select_model
from chatshell_ready import wait_until_ready
from chatshell_server import OllamaServer
from chatshell_session import Session
from chatshell_turn import run_turn

EXIT_COMMANDS = ("exit", "quit")
RESET_COMMANDS = ("clear", "reset")


# --- Output helpers ---
def show_header(console, session, logos, clear=True):
    if clear:
        clear_screen()
    show_logo(console, session.model, logos)
    console.plain()
    console.info("Selected model: ", end="")
    console.success(session.model)


def report_files(console, results):
    written = [r.path for r in results if isinstance(r, FileWritten)]
    for r in results:
        if not isinstance(r, FileWritten):
            console.error(f"\nFile '{r.path}' was not written: {r.reason}.")
    if written:
        console.success(f"\nFile(s) saved: {', '.join(written)}")


def load_logos_or_warn(console, path):
    try:
        return load_logos(path)
    except (OSError, ValueError) as e:
        console.error(f"Notice: could not load ASCII logos: {e}")
        console.info("Continuing without logos...")
        return {}


# --- Chat loop ---
def chat_loop(session, console, logos, base_url=None, input_fn=None):
    input_fn = input_fn or input
    console.info("System prompt loaded. Type 'exit' to quit or 'clear' to reset.")
    while True:
        console.prompt("\n>>> ")
        try:
            text = input_fn().strip()
        except EOFError:
            break

        if text.lower() in EXIT_COMMANDS:
            break
        if text.lower() in RESET_COMMANDS:
            session.reset()
            show_header(console, session, logos)
            console.info("System prompt loaded. Context reset.")
            continue
        if not text:
            continue

        console.model("AI: ", end="")
        try:
            result = run_turn(session, text, on_fragment=console.fragment_sink(), base_url=base_url)
        except TurnFailed as e:
            console.error(f"\nError generating response: {e}")
            console.error("Context reset due to an error.")
            continue
        console.plain()
        report_files(console, extract_and_write(result.reply))


# --- Main ---
def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Chat with local Ollama models from the terminal.")
    parser.add_argument("--url", default=chatshell_config.OLLAMA_URL, help="Ollama base URL")
    parser.add_argument("--model", help="Model to use; skips the selection menu")
    parser.add_argument("--no-serve", action="store_true", help="Do not start 'ollama serve'")
    parser.add_argument("--timeout", type=float, default=chatshell_config.READY_TIMEOUT,
                        help="Seconds to wait for the server to answer")
    parser.add_argument("--logos", default=chatshell_config.LOGOS_FILE, help="JSON file with ASCII logos")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")
    return parser.parse_args(argv)


def startup(args, console, server):
    if not args.no_serve:
        console.info("Starting the Ollama server...")
        if server.start():
            console.info(f"Ollama server started (PID: {server.pid}). Waiting for it to be ready", end="")
    if not wait_until_ready(args.url, timeout=args.timeout, on_wait=lambda: console.info(".", end="")):
        console.plain()
        raise ServerNotReady(f"Ollama did not answer at {args.url} within {args.timeout:g}s")
    console.success("\nOllama is ready and responding!")


def main(argv=None):
    args = parse_args(argv)
    console = Console(color=not args.no_color)
    server = OllamaServer(args.url)
    server.install_signal_handlers(console)
    clear_screen()
    logos = load_logos_or_warn(console, args.logos)

    try:
        startup(args, console, server)
        model = args.model or select_model(list_models(args.url), console)
        if model is None:
            console.info("No model was selected or none are available. Exiting.")
            return 0
        session = Session(model)
        log_event(f"session started model={model}")
        show_header(console, session, logos)
        chat_loop(session, console, logos, base_url=args.url)
        return 0
    except ServerNotReady as e:
        console.error(f"{e}. Stopping...")
        return 1
    except ChatShellError as e:
        console.error(f"Error: {e}")
        return 1
    finally:
        console.plain()
        if server.stop():
            console.success("Application finished. Ollama server stopped.")
        else:
            console.info("Application finished.")


if __name__ == "__main__":
    sys.exit(main())
