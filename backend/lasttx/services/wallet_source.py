"""Wallet list loading and private-key handling."""
import csv
import logging
import string
from pathlib import Path
from typing import List, Optional, Tuple

from eth_account import Account

from lasttx.utils.errors import KeyDerivationError, WalletSourceError

logger = logging.getLogger(__name__)

ADDRESS_HEX_LENGTH = 40
PRIVATE_KEY_HEX_LENGTH = 64


def _is_hex(value: str) -> bool:
    return all(c in string.hexdigits for c in value)


def identify_input(token: str) -> Tuple[str, bool]:
    """
    Classify a wallet file entry.
    
    Returns:
        The trimmed token and whether it is a private key. Tokens that are
        neither a 20-byte address nor a 32-byte key are passed through as
        addresses.
    """
    trimmed = token.strip()
    digits = trimmed[2:] if trimmed.startswith("0x") else trimmed
    if len(digits) == PRIVATE_KEY_HEX_LENGTH and _is_hex(digits):
        return trimmed, True
    return trimmed, False


def mask_private_key(private_key: str) -> str:
    if len(private_key) <= 10:
        return private_key
    return f"{private_key[:6]}...{private_key[-4:]}"


def private_key_to_address(private_key: str) -> str:
    """Derive the lower-case hex address controlled by a private key."""
    key = private_key if private_key.startswith("0x") else f"0x{private_key}"
    try:
        return Account.from_key(key).address.lower()
    except Exception as e:
        raise KeyDerivationError(f"Cannot derive address from {mask_private_key(private_key)}") from e


def normalize_entry(token: str) -> Optional[str]:
    """Turn one wallet entry into a ``0x`` address, or None when it must be skipped."""
    normalized, is_private_key = identify_input(token)
    if not normalized:
        return None
    
    if is_private_key:
        try:
            address = private_key_to_address(normalized)
        except KeyDerivationError as e:
            logger.warning("%s", e)
            return None
        logger.info("Private key -> address: %s -> %s", mask_private_key(normalized), address)
        return address
    
    if not normalized.startswith("0x"):
        return f"0x{normalized}"
    return normalized


def _read_csv(path: Path) -> List[str]:
    with path.open(newline="", encoding="utf-8") as handle:
        rows = csv.reader(handle)
        next(rows, None)  # header
        return [row[0] for row in rows if row]


def _read_lines(path: Path) -> List[str]:
    with path.open(encoding="utf-8") as handle:
        return handle.read().splitlines()


def load_wallet_addresses(
    csv_path: str = "data/wallets.csv",
    txt_path: str = "data/wallets.txt",
) -> List[str]:
    """
    Read wallet entries from the CSV file, or the text file when there is no CSV.
    
    Raises:
        WalletSourceError: If neither file can be read
    """
    for path, reader in ((Path(csv_path), _read_csv), (Path(txt_path), _read_lines)):
        if not path.is_file():
            continue
        try:
            entries = reader(path)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise WalletSourceError(f"Cannot read wallet file {path}: {e}") from e
        
        addresses = [address for address in map(normalize_entry, entries) if address]
        logger.info("Read %d addresses from %s", len(addresses), path)
        return addresses
    
    raise WalletSourceError(f"No wallet file found ({csv_path} or {txt_path})")
