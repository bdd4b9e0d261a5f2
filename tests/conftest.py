"""
Pytest fixtures for tsindex tests.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path for tsindex imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep tests away from the user's config and log file
os.environ["TSINDEX_DATA_PATH"] = "/tmp/tsindex_test_data"
os.environ.pop("TSINDEX_SOURCE_ROOT", None)
os.environ.pop("TSINDEX_EXTENSIONS", None)


def write_file(root: Path, rel_path: str, content: str) -> Path:
    """Write a file below root, creating parent directories."""
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """Create a small TypeScript source tree with a few modules."""
    write_file(temp_dir, "index.ts", '''
export * from "./socket"
export { makeSocket, SocketConfig as Config } from "./socket/config"
''')

    write_file(temp_dir, "socket/config.ts", '''
/** Options for opening a socket. */
export interface SocketConfig {
    url: string;
    timeoutMs?: number;
}

export interface WebSocketConfig extends SocketConfig {
    protocols: string[];
}

/** Creates a socket from a config. */
export function makeSocket(config: SocketConfig): Socket {
    return new Socket(config)
}

export class Socket {
    constructor(private config: SocketConfig) {}

    send(data: string): void {}
}

function internalHelper() {}
''')

    write_file(temp_dir, "socket/events.ts", '''
export type EventName = "open" | "close"

export enum ReadyState {
    Connecting,
    Open,
    Closing,
    Closed,
}

export const DEFAULT_EVENT: EventName = "open"
''')

    write_file(temp_dir, "types/message.ts", '''
/** A message sent over the socket. */
export interface Message {
    id: string;
    body: string;
}

export interface MessageWithMeta extends Message {
    meta: Record<string, unknown>;
}

export class MessageQueue implements Iterable<Message> {
    [Symbol.iterator](): Iterator<Message> {
        return [][Symbol.iterator]()
    }
}
''')

    # Never indexed
    write_file(temp_dir, "types/global.d.ts", "export interface Ambient {}\n")
    write_file(temp_dir, "socket/__tests__/socket.test.ts", "export const fixture = 1\n")
    write_file(temp_dir, "node_modules/dep/index.ts", "export const dep = 1\n")

    return temp_dir
