"""Exception types for deepgram-mcp."""


class DeepgramMCPError(Exception):
    """Base class for deepgram-mcp errors."""
    pass


class ConfigurationError(DeepgramMCPError):
    """Raised at startup when a required setting such as DEEPGRAM_API_KEY is missing."""
    pass


class ProviderError(DeepgramMCPError):
    """Raised when the speech provider gives back no usable audio."""
    pass


class UploadError(DeepgramMCPError):
    """Raised when uploading generated audio to the storage service fails.

    The synthesis tool never lets this escape: the upload is optional and a
    failure only drops the download link from the result.
    """
    pass
