import json
import os
import subprocess
import sys

from colorama import Fore, Style, init

# --- Logo palettes: (start RGB, end RGB) ---
PALETTES = {
    "llama": ((170, 0, 255), (0, 170, 255)),
    "mistral": ((255, 140, 0), (0, 130, 255)),
    "gemma": ((74, 144, 226), (213, 62, 79)),
    "phi3": ((0, 180, 180), (200, 200, 0)),
    "qwen": ((255, 100, 0), (255, 200, 0)),
    "deepseek": ((0, 200, 100), (100, 100, 255)),
}
DEFAULT_PALETTE = ((240, 240, 240), (220, 220, 220))


class Console:
    """Styled terminal output, passed to whatever needs to print."""

    def __init__(self, stream=None, color=True):
        if color:
            init()
        self.stream = stream if stream is not None else sys.stdout
        self.color = color

    def _write(self, style, text, end="\n"):
        if self.color and style:
            text = f"{style}{text}{Style.RESET_ALL}"
        self.stream.write(text + end)
        self.stream.flush()

    def success(self, text, end="\n"):
        self._write(Fore.GREEN + Style.BRIGHT, text, end)

    def info(self, text, end="\n"):
        self._write(Fore.YELLOW, text, end)

    def error(self, text, end="\n"):
        self._write(Fore.RED, text, end)

    def prompt(self, text, end=""):
        self._write(Fore.CYAN + Style.BRIGHT, text, end)

    def model(self, text, end="\n"):
        self._write(Fore.WHITE + Style.BRIGHT, text, end)

    def plain(self, text="", end="\n"):
        self._write(None, text, end)

    def fragment_sink(self):
        def sink(fragment):
            self.model(fragment, end="")
        return sink


def clear_screen():
    command = ["cmd", "/c", "cls"] if os.name == "nt" else ["clear"]
    subprocess.run(command, check=False)


# --- Logos ---
def load_logos(path):
    """Read {key: [lines]} from a JSON file; raises OSError or ValueError."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"logo file '{path}' must hold a JSON object")
    return {str(key).lower(): [str(line) for line in lines] for key, lines in data.items()}


def logo_for_model(model_name, logos):
    """Pick the logo key and palette for a model name, or (None, default)."""
    name = model_name.lower()
    for key, palette in PALETTES.items():
        if key in name:
            return key, palette
    for key in logos:
        if key in name:
            return key, DEFAULT_PALETTE
    return None, DEFAULT_PALETTE


def _lerp(start, end, ratio):
    return int(start + ratio * (end - start))


def gradient_lines(lines, start_rgb, end_rgb):
    """Colour each character along a left-to-right 24-bit gradient."""
    max_width = max((len(line) for line in lines), default=0)
    if max_width == 0:
        return []
    out = []
    for line in lines:
        chars = []
        for x, char in enumerate(line):
            ratio = x / max_width
            r, g, b = (_lerp(s, e, ratio) for s, e in zip(start_rgb, end_rgb))
            chars.append(f"\x1b[38;2;{r};{g};{b}m{char}\x1b[0m")
        out.append("".join(chars))
    return out


def show_logo(console, model_name, logos):
    key, (start_rgb, end_rgb) = logo_for_model(model_name, logos)
    if key is None or key not in logos:
        return
    for line in gradient_lines(logos[key], start_rgb, end_rgb):
        console.plain(line)
