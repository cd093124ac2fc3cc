from .descriptor import build_channel_descriptor, build_channel_payload, extract_host

__all__ = ["build_channel_descriptor", "build_channel_payload", "extract_host"]
