"""
Pytest configuration and shared fixtures for bwtpress tests
"""

import random
from typing import List

import pytest


@pytest.fixture
def sample_texts() -> List[bytes]:
    """Text inputs, including repetitive and non-ASCII ones"""
    texts = [
        'BANANA',
        'MISSISSIPPI',
        'The quick brown fox jumps over the lazy dog',
        'AAAAAAAAAAAAAAAAAAAAAA',
        'ABCDEFGHIJKLMNOPQRSTUVWXYZ',
        '1234567890',
        'Hello, World! 🌍',
        'Lorem ipsum dolor sit amet, consectetur adipiscing elit.',
        'A' * 1000,
        'ABCABC' * 100,
    ]
    return [text.encode('utf-8') for text in texts]


@pytest.fixture
def binary_samples() -> List[bytes]:
    """Binary inputs covering zero bytes, the escape byte and edge cases"""
    rng = random.Random(1234)
    return [
        b'',
        b'\x2a',
        b'\x00',
        b'\xff',
        b'\x00' * 5,
        b'\xff' * 5,
        bytes([0, 1, 2, 3, 4, 5]),
        bytes([255, 254, 253, 252, 251]),
        bytes([0, 255] * 3),
        bytes([128, 64, 32, 16, 8, 4, 2, 1]),
        bytes(range(256)),
        b'\x2a' * 100,
        b'\x80' * 1000,
        b'\xff' * 600,
        bytes(rng.randrange(256) for _ in range(500)),
    ]


@pytest.fixture
def all_bytes() -> bytes:
    return bytes(range(256))


@pytest.fixture
def random_blocks() -> List[bytes]:
    """Seeded random inputs of growing length"""
    rng = random.Random(42)
    blocks = []
    for size in (1, 10, 100, 1000):
        for _ in range(5):
            blocks.append(bytes(rng.randrange(256) for _ in range(size)))
    return blocks


@pytest.fixture
def store_dir(tmp_path):
    """Empty archive store directory"""
    path = tmp_path / "saved"
    path.mkdir()
    return path
