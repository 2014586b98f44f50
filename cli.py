"""
Interactive menu for the smallrsa toolkit.

Reads the operation and its arguments from stdin and prints the result, one
operation per menu round. Choose 0 to quit.
"""
import logging
import os
from typing import Callable, Optional

from dotenv import load_dotenv

from smallrsa.block_codec import decode, encode, sign, verify
from smallrsa.errors import RSAError
from smallrsa.keygen import MAX_EXPONENT, MAX_MODULUS, generate_key_pair, parse_max_attempts
from smallrsa.recovery import recover_private_key

MENU = """
Small RSA – Menu
================

1) Generate keys
2) Encode a message
3) Decode a message
4) Sign a message
5) Verify a signature
6) Recover the private key
0) Quit
"""


class MenuCLI:
    """
    Menu loop over the smallrsa operations.

    input_func / print_func are injectable so the loop can be driven from
    tests without a terminal.
    """

    def __init__(self, input_func: Callable[[str], str] = input,
                 print_func: Callable[..., None] = print,
                 max_attempts: Optional[int] = None) -> None:
        self.input = input_func
        self.print = print_func
        self.max_attempts = max_attempts

    # ----- Prompts -----

    def ask_int(self, prompt: str) -> int:
        text = self.input(prompt).strip()
        if not text.isdecimal():
            raise ValueError(f"expected a non-negative integer, got {text!r}")
        return int(text)

    def ask_key(self, title: str, exponent_name: str):
        self.print(title)
        n = self.ask_int("n: ")
        if n > MAX_MODULUS:
            raise ValueError(f"n must not exceed {MAX_MODULUS}")
        exponent = self.ask_int(f"{exponent_name}: ")
        if not 0 < exponent <= MAX_EXPONENT:
            raise ValueError(f"{exponent_name} must be between 1 and {MAX_EXPONENT}")
        return n, exponent

    # ----- Menu Operations -----

    def op_generate_keys(self) -> None:
        pair = generate_key_pair(max_attempts=self.max_attempts)
        self.print("Keys generated")
        self.print(f"n: {pair.n}")
        self.print(f"e: {pair.e}")
        self.print(f"d: {pair.d}")
        self.print(f"Public key (n, e): {pair.public_key}")
        self.print(f"Private key (n, d): {pair.private_key}")

    def op_encode(self) -> None:
        n, e = self.ask_key("Enter the public key:", "e")
        message = self.input("Message: ")
        self.print(f"Result: {encode(n, e, message)}")

    def op_decode(self) -> None:
        n, d = self.ask_key("Enter the private key:", "d")
        encoded = self.input("Encoded message: ").strip()
        self.print(f"Result: {decode(n, d, encoded)}")

    def op_sign(self) -> None:
        n, d = self.ask_key("Enter the private key:", "d")
        message = self.input("Message to sign: ")
        self.print(f"Signature: {sign(n, d, message)}")

    def op_verify(self) -> None:
        n, e = self.ask_key("Enter the public key:", "e")
        signature = self.input("Signature: ").strip()
        self.print(f"Message: {verify(n, e, signature)}")

    def op_recover(self) -> None:
        n, e = self.ask_key("Enter the public key:", "e")
        self.print(f"Private key: {recover_private_key(n, e)}")

    # ----- Main Loop -----

    def run(self) -> None:
        operations = {
            "1": self.op_generate_keys,
            "2": self.op_encode,
            "3": self.op_decode,
            "4": self.op_sign,
            "5": self.op_verify,
            "6": self.op_recover,
        }

        while True:
            self.print(MENU)
            try:
                choice = self.input("Select an option: ").strip()
            except EOFError:
                break

            if choice == "0":
                self.print("Goodbye.")
                break
            operation = operations.get(choice)
            if operation is None:
                self.print("[!] Invalid choice. Please try again.\n")
                continue

            try:
                operation()
            except (RSAError, ValueError) as err:
                self.print(f"[!] {err}\n")


def main() -> None:
    load_dotenv()
    debug = os.getenv("SMALLRSA_DEBUG", "False") == "True"
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)

    try:
        max_attempts = parse_max_attempts(os.getenv("SMALLRSA_MAX_ATTEMPTS"))
    except RSAError as err:
        raise SystemExit(f"[!] SMALLRSA_MAX_ATTEMPTS: {err}") from err
    MenuCLI(max_attempts=max_attempts).run()


if __name__ == "__main__":
    main()
