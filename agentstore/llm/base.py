from typing import Protocol


class LLMProvider(Protocol):
    """One persona-conditioned completion: system prompt in, one text segment out."""

    name: str

    def generate(self, system_prompt: str, user_message: str) -> str:
        """
        Send user_message under system_prompt and return the first generated
        text segment.

        Raises a ProviderError subclass on any failure, including
        EmptyResponseError when the model yields no text.
        """
        ...
