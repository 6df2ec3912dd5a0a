from .openai_client import ChatMetadata, OpenAIChatClient

__all__ = ["ChatMetadata", "OpenAIChatClient"]
