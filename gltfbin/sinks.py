"""
where encoded attribute bytes end up.

BinarySink appends everything to the shared Bin (buffer 0),
TextSink gives every write its own base64 buffer.
"""
import base64
from typing import Optional

from . import constants
from . import jsontype
from .serialization import Bin


class AttributeSink:
    def __init__(self, root: jsontype.Root) -> None:
        self.root = root

    def write(self, data: bytes, target: Optional[int] = None) -> int:
        """store data and return the index of a bufferView covering it"""
        raise NotImplementedError()

    def finalize(self) -> None:
        pass

    def _push_view(self, buffer: int, byteOffset: int, byteLength: int, target):
        view = jsontype.BufferView(
            buffer=buffer,
            byteOffset=byteOffset,
            byteLength=byteLength,
        )
        if target is not None:
            view["target"] = target
        index = len(self.root["bufferViews"])
        self.root["bufferViews"].append(view)
        return index


class BinarySink(AttributeSink):
    def __init__(self, root: jsontype.Root, bin: Bin) -> None:
        super().__init__(root)
        self.bin = bin
        self.written = False

    def write(self, data: bytes, target: Optional[int] = None) -> int:
        # float and uint32 accessors need 4 byte aligned views
        self.bin.align(4)
        offset = self.bin.push(data)
        self.written = True
        return self._push_view(0, offset, len(data), target)

    def finalize(self) -> None:
        if not self.written:
            return
        # the container writer supplies the bytes, so no uri
        self.root["buffers"].append(jsontype.Buffer(byteLength=self.bin.offset))


class TextSink(AttributeSink):
    def write(self, data: bytes, target: Optional[int] = None) -> int:
        buffer = jsontype.Buffer(
            byteLength=len(data),
            uri=constants.DATA_URI_PREFIX + base64.b64encode(data).decode("ascii"),
        )
        index = len(self.root["buffers"])
        self.root["buffers"].append(buffer)
        return self._push_view(index, 0, len(data), target)


def create_sink(root: jsontype.Root, bin: Bin, use_binary: bool) -> AttributeSink:
    if use_binary:
        return BinarySink(root, bin)
    return TextSink(root)
