import struct
from typing import Iterator, Tuple

# Event Types
EVT_STATUS = 0x01
EVT_RESET = 0x02

MAGIC = b"GRIDLOG"

class EventWriter:
    """
    Binary log of cell status changes, one record per mutation.
    Subscribe log_status to a Grid (or pass the writer to Grid()) to record it.
    """
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")
        self.count = 0

    def write_header(self, width: int, height: int):
        # Header: Magic "GRIDLOG" + Width (4b) + Height (4b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">II", width, height))

    def log_status(self, x: int, y: int, status: int):
        # 1 byte type + 2b X + 2b Y + 1b status = 6 bytes
        self.file.write(struct.pack(">BHHB", EVT_STATUS, x, y, status))
        self.count += 1

    def log_reset(self, width: int, height: int):
        # Marks a wholesale grid rebuild (clear / resize): 1b type + new Width + Height
        self.file.write(struct.pack(">BII", EVT_RESET, width, height))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.width = 0
        self.height = 0

    def read_header(self) -> Tuple[int, int]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        data = self.file.read(8)
        if len(data) != 8:
            raise ValueError("Truncated event log header")
        self.width, self.height = struct.unpack(">II", data)
        return self.width, self.height

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)

            if type_code == EVT_STATUS:
                data = self.file.read(5) # 2 shorts + 1 byte
                if len(data) != 5:
                    raise ValueError("Truncated status event")
                x, y, status = struct.unpack(">HHB", data)
                yield (type_code, (x, y, status))

            elif type_code == EVT_RESET:
                data = self.file.read(8)
                if len(data) != 8:
                    raise ValueError("Truncated reset event")
                yield (type_code, struct.unpack(">II", data))

            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
