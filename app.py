from smallrsa.block_codec import decode, encode, sign, signature_matches, verify
from smallrsa.errors import InvalidInputError, KeyGenerationError, RSAError
from smallrsa.keygen import (
    MAX_EXPONENT,
    MAX_MODULUS,
    generate_key_pair,
    key_pair_from_primes,
    parse_max_attempts,
)
from smallrsa.recovery import recover_private_key
from flask import Flask, jsonify, request
from dotenv import load_dotenv
import logging
import os

load_dotenv()

app = Flask(__name__)

app.config['SMALLRSA_HOST'] = os.getenv('SMALLRSA_HOST', '0.0.0.0')
app.config['SMALLRSA_PORT'] = int(os.getenv('SMALLRSA_PORT', 5000))
app.config['SMALLRSA_DEBUG'] = os.getenv('SMALLRSA_DEBUG', 'False') == 'True'
app.config['SMALLRSA_MAX_ATTEMPTS'] = parse_max_attempts(os.getenv('SMALLRSA_MAX_ATTEMPTS'))

logging.basicConfig(
    level=logging.DEBUG if app.config['SMALLRSA_DEBUG'] else logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

OPERATIONS = {
    "/keys": "generate a key pair (optionally from chosen primes p, q)",
    "/encode": "encode a message with (n, e)",
    "/decode": "decode a message with (n, d)",
    "/sign": "sign a message with (n, d)",
    "/verify": "verify a signature with (n, e)",
    "/recover": "brute-force d from the public key (n, e)",
}

# ============================================
# REQUEST PARSING
# ============================================

def read_int(data: dict, name: str) -> int:
    value = data.get(name)
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"'{name}' is required and must be an integer")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text.isdecimal():
        raise InvalidInputError(f"'{name}' must be a non-negative integer, got {value!r}")
    return int(text)


def read_key(data: dict, exponent_name: str):
    n = read_int(data, "n")
    if n > MAX_MODULUS:
        raise InvalidInputError(f"n must not exceed {MAX_MODULUS}")
    exponent = read_int(data, exponent_name)
    if not 0 < exponent <= MAX_EXPONENT:
        raise InvalidInputError(f"{exponent_name} must be between 1 and {MAX_EXPONENT}")
    return n, exponent


def read_text(data: dict, name: str, strip: bool = False) -> str:
    value = data.get(name)
    if not isinstance(value, str):
        raise InvalidInputError(f"'{name}' is required and must be a string")
    return value.strip() if strip else value


def request_data() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

# ============================================
# ERROR HANDLERS
# ============================================

@app.errorhandler(KeyGenerationError)
def key_generation_failed(err):
    app.logger.warning("key generation failed: %s", err)
    return jsonify({"success": False, "error": str(err)}), 503


@app.errorhandler(RSAError)
def invalid_input(err):
    return jsonify({"success": False, "error": str(err)}), 400

# ============================================
# ROUTES
# ============================================

@app.route("/")
def home():
    return jsonify({"operations": OPERATIONS})


@app.route("/keys", methods=["POST"])
def generate_keys():
    data = request_data()
    max_attempts = app.config['SMALLRSA_MAX_ATTEMPTS']

    if "p" in data or "q" in data:
        pair = key_pair_from_primes(read_int(data, "p"), read_int(data, "q"),
                                    max_attempts=max_attempts)
    else:
        pair = generate_key_pair(max_attempts=max_attempts)

    return jsonify({
        "success": True,
        "n": pair.n,
        "e": pair.e,
        "d": pair.d,
        "public_key": pair.public_key,
        "private_key": pair.private_key,
    })


@app.route("/encode", methods=["POST"])
def encode_message():
    data = request_data()
    n, e = read_key(data, "e")
    return jsonify({"success": True, "encoded": encode(n, e, read_text(data, "message"))})


@app.route("/decode", methods=["POST"])
def decode_message():
    data = request_data()
    n, d = read_key(data, "d")
    encoded = read_text(data, "encoded", strip=True)
    return jsonify({"success": True, "message": decode(n, d, encoded)})


@app.route("/sign", methods=["POST"])
def sign_message():
    data = request_data()
    n, d = read_key(data, "d")
    return jsonify({"success": True, "signature": sign(n, d, read_text(data, "message"))})


@app.route("/verify", methods=["POST"])
def verify_signature():
    data = request_data()
    n, e = read_key(data, "e")
    signature = read_text(data, "signature", strip=True)

    result = {"success": True, "message": verify(n, e, signature)}
    if "message" in data:
        result["valid"] = signature_matches(n, e, signature, read_text(data, "message"))
    return jsonify(result)


@app.route("/recover", methods=["POST"])
def recover_key():
    data = request_data()
    n, e = read_key(data, "e")
    return jsonify({"success": True, "d": recover_private_key(n, e)})


if __name__ == "__main__":
    app.run(
        host=app.config['SMALLRSA_HOST'],
        port=app.config['SMALLRSA_PORT'],
        debug=app.config['SMALLRSA_DEBUG'],
    )
