from .json_codec import JsonPayloadCodec

__all__ = ["JsonPayloadCodec"]
