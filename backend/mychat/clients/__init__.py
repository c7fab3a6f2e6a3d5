from mychat.clients.chat import ChatApiClient

__all__ = ["ChatApiClient"]
