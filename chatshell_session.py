import chatshell_config


def build_system_prompt(model):
    return chatshell_config.SYSTEM_PROMPT_TEMPLATE.format(model=model)


class Session:
    """Conversation state carried between turns for one chosen model.

    ``context`` is the opaque token Ollama returns on the final record of a
    turn. It is either None or exactly the token of the last completed turn.
    """

    def __init__(self, model, system_prompt=None):
        self._model = model
        if system_prompt is None:
            system_prompt = build_system_prompt(model)
        self.system_prompt = system_prompt
        self.context = None
        self.turns = 0

    @property
    def model(self):
        return self._model

    def reset(self):
        self.context = None
        self.turns = 0

    def __repr__(self):
        size = len(self.context) if self.context else 0
        return f"Session(model={self._model!r}, turns={self.turns}, context_len={size})"
