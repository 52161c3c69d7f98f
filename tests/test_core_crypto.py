"""
Unit tests for Core Crypto modules.

Tests:
- PBKDF2 key derivation
- AES-CBC engine
- Encryption detection heuristic
"""

import hashlib
import io
import os

import pytest

from cryptlayer.config import DEFAULTS, CryptoDefaults, PBKDF2_ITERATIONS
from cryptlayer.exceptions import InvalidArgumentError, CryptographicError
from cryptlayer.core_crypto.key_derivation import (
    KeyMaterial, derive_key_material, resolve_key_material
)
from cryptlayer.core_crypto.engine import (
    Transform, make_encryptor, make_decryptor, apply_transform,
    encrypt_bytes, decrypt_bytes
)
from cryptlayer.core_crypto.heuristic import (
    is_data_encrypted, looks_encrypted, is_stream_encrypted
)


class TestDefaults:
    """Tests for the fixed default key material."""
    
    def test_default_bytes(self):
        """Default key, IV and salt must keep their exact values."""
        assert DEFAULTS.key.hex().upper() == (
            "3AF29C71B4E5086D1FC98752AB34D0FE46A12BC39E781460DF05BB296F93ED0A"
        )
        assert DEFAULTS.iv.hex().upper() == "6734BF7D980A2D43C4EB81454F4BB71D"
        assert DEFAULTS.salt.hex().upper() == "FA8329015B7E4C9A3D18EF62CA079D55"
        assert DEFAULTS.iterations == PBKDF2_ITERATIONS == 1000
    
    def test_defaults_immutable(self):
        """Defaults cannot be reassigned."""
        with pytest.raises(AttributeError):
            DEFAULTS.key = b"\x00" * 32
    
    def test_invalid_defaults_rejected(self):
        """Wrong-length defaults are rejected at construction."""
        with pytest.raises(ValueError):
            CryptoDefaults(key=b"short", iv=DEFAULTS.iv, salt=DEFAULTS.salt)


class TestKeyDerivation:
    """Tests for PBKDF2-HMAC-SHA1 key derivation."""
    
    def test_rfc6070_vector(self):
        """First derived bytes match the RFC 6070 PBKDF2-HMAC-SHA1 vector."""
        material = derive_key_material("password", b"salt", iterations=2)
        assert material.key[:20].hex() == "ea6c014dc72d6f8ccd1ed92ace1d41f0d8de8957"
    
    def test_key_and_iv_from_one_stream(self):
        """Key is bytes 0-31 and IV bytes 32-47 of one derivation."""
        stream = hashlib.pbkdf2_hmac("sha1", b"Un1v3rs3!", DEFAULTS.salt, 1000, dklen=48)
        material = derive_key_material("Un1v3rs3!")
        assert material.key == stream[:32]
        assert material.iv == stream[32:48]
    
    def test_sizes(self):
        """Derived key is 32 bytes and IV 16 bytes."""
        material = derive_key_material("test_password")
        assert len(material.key) == 32
        assert len(material.iv) == 16
    
    def test_deterministic(self):
        """Same password and salt give the same key material."""
        assert derive_key_material("pw") == derive_key_material("pw")
    
    def test_different_password_different_key(self):
        """Different passwords give different key material."""
        assert derive_key_material("password1") != derive_key_material("password2")
    
    def test_different_salt_different_key(self):
        """Different salts give different key material."""
        m1 = derive_key_material("pw", b"salt1" + b"\x00" * 11)
        m2 = derive_key_material("pw", b"salt2" + b"\x00" * 11)
        assert m1 != m2
    
    def test_empty_password_allowed(self):
        """An empty password derives a fixed key."""
        assert derive_key_material("") == derive_key_material("")
    
    def test_none_password_rejected(self):
        with pytest.raises(InvalidArgumentError):
            derive_key_material(None)


class TestKeyMaterial:
    """Tests for key material validation and resolution."""
    
    @pytest.mark.parametrize("size", [16, 24, 32])
    def test_valid_key_sizes(self, size):
        KeyMaterial(b"\x01" * size, b"\x02" * 16)
    
    @pytest.mark.parametrize("size", [0, 15, 20, 33])
    def test_invalid_key_size(self, size):
        with pytest.raises(InvalidArgumentError):
            KeyMaterial(b"\x01" * size, b"\x02" * 16)
    
    def test_invalid_iv_size(self):
        with pytest.raises(InvalidArgumentError):
            KeyMaterial(b"\x01" * 32, b"\x02" * 8)
    
    def test_resolve_default(self):
        assert resolve_key_material() == KeyMaterial(DEFAULTS.key, DEFAULTS.iv)
    
    def test_resolve_password(self):
        assert resolve_key_material("pw") == derive_key_material("pw")
    
    def test_resolve_password_and_key_rejected(self):
        with pytest.raises(InvalidArgumentError):
            resolve_key_material("pw", key=DEFAULTS.key, iv=DEFAULTS.iv)
    
    def test_resolve_key_without_iv_rejected(self):
        with pytest.raises(InvalidArgumentError):
            resolve_key_material(key=DEFAULTS.key)


class TestEngine:
    """Tests for the AES-CBC/PKCS7 engine."""
    
    def test_aes256_cbc_nist_vector(self):
        """NIST SP 800-38A F.2.5 CBC-AES256 (padding block appended)."""
        key = bytes.fromhex(
            "603deb1015ca71be2b73aef0857d7781"
            "1f352c073b6108d72d9810a30914dff4"
        )
        iv = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
        pt = bytes.fromhex(
            "6bc1bee22e409f96e93d7e117393172a"
            "ae2d8a571e03ac9c9eb76fac45af8e51"
            "30c81c46a35ce411e5fbc1191a0a52ef"
            "f69f2445df4f9b17ad2b417be66c3710"
        )
        expected = bytes.fromhex(
            "f58c4c04d6e5f1ba779eabfb5f7bfbd6"
            "9cfc4e967edb808d679f777bc6702c7d"
            "39f23369a9d9bacfa530e26304231461"
            "b2eb05e2c39be9fcda6c19078c6a9d1b"
        )
        ct = encrypt_bytes(pt, key, iv)
        assert len(ct) == 80
        assert ct[:64] == expected
        assert decrypt_bytes(ct, key, iv) == pt
    
    @pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 100, 4096])
    def test_roundtrip_lengths(self, length):
        """Any plaintext length round-trips to block-aligned ciphertext."""
        data = os.urandom(length)
        ct = encrypt_bytes(data)
        assert len(ct) % 16 == 0
        assert len(ct) > length
        assert decrypt_bytes(ct) == data
    
    @pytest.mark.parametrize("size", [16, 24, 32])
    def test_roundtrip_key_sizes(self, size):
        key = os.urandom(size)
        iv = os.urandom(16)
        assert decrypt_bytes(encrypt_bytes(b"payload", key, iv), key, iv) == b"payload"
    
    def test_deterministic(self):
        """Same key, IV and plaintext give the same ciphertext."""
        assert encrypt_bytes(b"same") == encrypt_bytes(b"same")
    
    def test_defaults_used_when_omitted(self):
        ct = encrypt_bytes(b"data")
        assert ct == encrypt_bytes(b"data", DEFAULTS.key, DEFAULTS.iv)
    
    def test_apply_with_factories(self):
        ct = apply_transform(b"hello", make_encryptor())
        assert apply_transform(ct, make_decryptor()) == b"hello"
    
    def test_incremental_matches_buffered(self):
        """Chunked updates produce the same output as one buffer."""
        data = os.urandom(1000)
        transform = make_encryptor()
        out = b"".join(transform.update(data[i:i + 7]) for i in range(0, len(data), 7))
        out += transform.finalize()
        assert out == encrypt_bytes(data)
    
    def test_unaligned_ciphertext_rejected(self):
        with pytest.raises(CryptographicError):
            decrypt_bytes(b"\x00" * 17)
    
    def test_empty_ciphertext_rejected(self):
        with pytest.raises(CryptographicError):
            decrypt_bytes(b"")
    
    def test_wrong_key_usually_fails_padding(self):
        """
        Wrong key material is rejected by the padding check in the common case.
        
        CBC has no MAC, so a wrong key can occasionally yield valid-looking
        padding. That is tolerated here but must never return the plaintext.
        """
        plaintext = b"confidential payload"
        ct = encrypt_bytes(plaintext)
        failures = 0
        for i in range(20):
            wrong = derive_key_material(f"wrong-{i}")
            try:
                result = decrypt_bytes(ct, wrong.key, wrong.iv)
            except CryptographicError:
                failures += 1
            else:
                assert result != plaintext
        assert failures >= 18
    
    def test_transform_direction(self):
        assert make_encryptor().is_encryptor
        assert not make_decryptor().is_encryptor
    
    def test_invalid_key_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Transform(b"short", DEFAULTS.iv, encrypt=True)


class TestHeuristic:
    """Tests for the encryption detection heuristic."""
    
    def test_empty_not_encrypted(self):
        assert not looks_encrypted(b"", 0)
    
    def test_unaligned_not_encrypted(self):
        """Unaligned data is never ciphertext, whatever its bytes."""
        assert not looks_encrypted(b"\x00" * 16, 17)
    
    def test_text_not_encrypted(self):
        assert not looks_encrypted(b"Hello, world!!!\n", 16)
    
    def test_binary_encrypted(self):
        assert looks_encrypted(b"\x00" * 16, 16)
    
    def test_allow_list_bytes(self):
        """CR, LF, BOM bytes and 32-127 count as text."""
        assert not is_data_encrypted(b"\r\n\xef\xbb\xbf \x7f~")
        assert not is_data_encrypted(b"\xbf\xef")  # BOM bytes checked individually
    
    def test_bytes_outside_allow_list(self):
        assert is_data_encrypted(b"abc\x80")
        assert is_data_encrypted(b"\t")
        assert is_data_encrypted(b"\x1f")
    
    def test_only_first_block_sampled(self):
        """Bytes after the first 16 are not inspected."""
        assert not looks_encrypted(b"A" * 16 + b"\x00" * 16, 32)
    
    def test_ciphertext_detected(self):
        ct = encrypt_bytes(b"The quick brown fox jumps over the lazy dog")
        assert looks_encrypted(ct, len(ct))
    
    def test_stream_position_restored(self):
        stream = io.BytesIO(encrypt_bytes(b"x" * 40))
        stream.seek(5)
        assert is_stream_encrypted(stream)
        assert stream.tell() == 5
    
    def test_plain_stream(self):
        assert not is_stream_encrypted(io.BytesIO(b"0123456789abcdef"))
        assert not is_stream_encrypted(io.BytesIO(b""))
