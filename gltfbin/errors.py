class ExportError(Exception):
    pass


class OptionsError(ExportError):
    pass


class MeshError(ExportError, ValueError):
    pass


class CodecError(ExportError):
    """The mesh-compression codec failed to encode or decode a mesh."""
