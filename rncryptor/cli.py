"""
Command-line interface for encrypting and decrypting RNCryptor containers.

Text mode prints containers as base64; file mode reads and writes raw bytes.
Passwords are always read interactively (never from argv) unless piped via stdin.
"""

from __future__ import annotations

import argparse
import base64
import binascii
import getpass
import os
import sys

from .core.errors import (
    AuthenticationFailed,
    CorruptCiphertext,
    MalformedInput,
    RNCryptorError,
)
from .core.formats import DEFAULT_VERSION, SUPPORTED_VERSIONS
from .core.pipeline import decrypt, encrypt, inspect

ENCRYPTED_SUFFIX = ".enc"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rncryptor",
        description="Encrypt and decrypt RNCryptor v2/v3 password containers",
    )
    parser.add_argument(
        "-o", "--operation",
        choices=["encrypt", "decrypt"],
        help="Operation to perform",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Show the container header without decrypting (no password needed)",
    )
    parser.add_argument(
        "-d", "--data",
        help="Plaintext (encrypt) or base64 container (decrypt/inspect). "
             "Use '-' to read from stdin.",
    )
    parser.add_argument(
        "-f", "--file",
        help="Path to file to encrypt or decrypt. "
             "Output goes to FILE.enc (encrypt) or FILE without .enc (decrypt).",
    )
    parser.add_argument(
        "--output",
        help="Explicit output file path (overrides default naming).",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite output file if it already exists.",
    )
    parser.add_argument(
        "--format-version",
        type=int,
        choices=list(SUPPORTED_VERSIONS),
        default=DEFAULT_VERSION,
        help=f"Container format version to write (default: {DEFAULT_VERSION})",
    )
    # Scripting only; warns on use
    parser.add_argument(
        "-p", "--password",
        help=argparse.SUPPRESS,
    )
    return parser


def _read_password(confirm: bool = False) -> str:
    """Prompt for the password on the terminal.

    Without a TTY a single unconfirmed line is read from stdin instead.
    """
    try:
        password = getpass.getpass("Password: ")
    except OSError:
        return sys.stdin.readline().rstrip("\n")

    if confirm:
        try:
            again = getpass.getpass("Repeat password: ")
        except OSError:
            _fail("cannot confirm the password without a terminal")
        if again != password:
            _fail("passwords do not match")
    return password


def _print_status(msg: str, error: bool = False) -> None:
    print(msg, file=sys.stderr if error else sys.stdout)


def _fail(msg: str) -> None:
    _print_status(f"Error: {msg}", error=True)
    sys.exit(1)


def _decode_container(text: str) -> bytes:
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError):
        _fail("container data is not valid base64")


def _read_input(args) -> str:
    if args.data == "-":
        return sys.stdin.read()
    if args.data is not None:
        return args.data
    return input("Enter data: ")


def _check_overwrite(path: str, force: bool) -> None:
    """Abort if output file exists and --force was not given."""
    if os.path.exists(path) and not force:
        _fail(
            f"output file already exists: {path}\n"
            "  Use --force to overwrite, or --output to choose a different path."
        )


def _default_output(path: str, operation: str) -> str:
    if operation == "encrypt":
        return path + ENCRYPTED_SUFFIX
    if path.endswith(ENCRYPTED_SUFFIX) and len(path) > len(ENCRYPTED_SUFFIX):
        return path.removesuffix(ENCRYPTED_SUFFIX)
    return path + ".dec"


def _describe_failure(exc: RNCryptorError) -> str:
    if isinstance(exc, AuthenticationFailed):
        return "Decryption failed: incorrect password or corrupted data."
    if isinstance(exc, CorruptCiphertext):
        return "Decryption failed: ciphertext is internally inconsistent."
    if isinstance(exc, MalformedInput):
        return f"Not a valid container: {exc}"
    return f"Error: {exc}"


def _print_inspection(raw: bytes) -> None:
    try:
        info = inspect(raw)
    except MalformedInput as exc:
        _fail(str(exc))

    flags = ", ".join(info["flags"]) or "none"
    print("RNCryptor Container Inspection")
    print(f"  Format version:   v{info['version']}")
    print(f"  Options:          {info['options']:#04x} ({flags})")
    print(f"  Encryption salt:  {info['encryption_salt']}")
    print(f"  HMAC salt:        {info['hmac_salt']}")
    print(f"  IV:               {info['iv']}")
    print(f"  Ciphertext:       {info['ciphertext_size']} bytes")
    print(f"  Total size:       {info['total_size']} bytes")


def run_cli(argv: list[str] | None = None) -> None:
    """Run the CLI interface."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --- Inspect ---
    if args.inspect:
        if args.file:
            if not os.path.isfile(args.file):
                _fail(f"file not found: {args.file}")
            with open(args.file, "rb") as f:
                raw = f.read()
        else:
            raw = _decode_container(_read_input(args))
        _print_inspection(raw)
        return

    # --- Determine operation ---
    if args.operation:
        operation = args.operation
    else:
        choice = input("Encrypt or Decrypt? (e/d): ").strip().lower()
        if choice in ("e", "encrypt"):
            operation = "encrypt"
        elif choice in ("d", "decrypt"):
            operation = "decrypt"
        else:
            _fail(f"unknown operation {choice!r}")

    if args.file and not os.path.isfile(args.file):
        _fail(f"file not found: {args.file}")

    data = "" if args.file else _read_input(args)

    # --- Password ---
    if args.password:
        _print_status(
            "Warning: -p/--password is insecure; the password ends up in "
            "process listings and shell history.",
            error=True,
        )
        password = args.password
    else:
        password = _read_password(confirm=(operation == "encrypt"))

    if not password:
        _fail("password cannot be empty")

    if args.file:
        _run_file_operation(args, operation, password)
        return

    # --- Text mode ---
    try:
        if operation == "encrypt":
            container = encrypt(data.encode("utf-8"), password, version=args.format_version)
            print(f"\nEncrypted (RNCryptor v{args.format_version}):")
            print(base64.b64encode(container).decode("ascii"))
        else:
            plaintext = decrypt(_decode_container(data), password)
            print("\nDecrypted:")
            print(plaintext.decode("utf-8", errors="replace"))
    except RNCryptorError as exc:
        _print_status(_describe_failure(exc), error=True)
        sys.exit(1)


def _run_file_operation(args, operation: str, password: str) -> None:
    """Encrypt or decrypt a file as raw bytes."""
    file_path = args.file
    with open(file_path, "rb") as f:
        raw = f.read()

    out_path = args.output or _default_output(file_path, operation)
    _check_overwrite(out_path, args.force)

    try:
        if operation == "encrypt":
            result = encrypt(raw, password, version=args.format_version)
        else:
            result = decrypt(raw, password)
    except RNCryptorError as exc:
        _print_status(_describe_failure(exc), error=True)
        sys.exit(1)

    with open(out_path, "wb") as f:
        f.write(result)

    verb = "Encrypted" if operation == "encrypt" else "Decrypted"
    _print_status(
        f"{verb}: {file_path} -> {out_path} ({len(raw)} bytes -> {len(result)} bytes)"
    )
