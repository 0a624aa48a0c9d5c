#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════════════╗
║              PASSWORD DEPTH: LAYERED GENERATOR & ANALYZER              ║
╚══════════════════════════════════════════════════════════════════════════╝

Scores a password by DEPTH: the number of independent transformation layers
it appears to contain, rather than by length or character-class counting.

Generation side (random transforms, cycled by ``layer % 4``):

  Layer 0: Interleave with symbols
  Layer 1: Cyclic rotation
  Layer 2: SHA-256 hash segment
  Layer 3: XOR with a random key

Analysis side (five independent signatures, evaluated in order):

  Base → Character Diversity → Positional Randomness →
  Encoding Pattern → Cryptographic Depth

The two sides share a taxonomy but are NOT inverses of each other: a password
generated at depth 5 may be analyzed at any depth from 1 to 5.

Randomness comes from OpenSSL's CSPRNG (``openssl rand``) or the kernel
CSPRNG (``os.urandom``). Both are safe to share across threads.
"""

import argparse
import enum
import hashlib
import json
import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 0: CONSTANTS & CONFIGURATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

ALPHANUMERIC = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
SYMBOLS = "!@#$%^&*-_+="  # shared by the interleave layer and the encoding detector
BASE64_EXTRA = "+/"
HEX_DIGITS = "0123456789ABCDEFabcdef"

DEFAULT_BASE_LENGTH = 8
DEFAULT_MINIMUM_DEPTH = 3
MIN_POSITIONAL_LENGTH = 3
MIN_CRYPTO_LENGTH = 8
HASH_SEGMENT_LENGTH = 4

EMPTY_DESCRIPTION = "Empty password"
NO_STRENGTH = "None"
UNKNOWN_STRENGTH = "Unknown"
STRENGTH_LABELS = {
    1: "Very Weak",
    2: "Weak",
    3: "Moderate",
    4: "Strong",
}
MAX_STRENGTH = "Very Strong"

SAMPLE_PASSWORDS = (
    "hello",
    "Hello123",
    "H3ll@W0rld!",
    "P@ssw0rd!2023#Secure",
    "aB3$x9Kp2Ff8e4A1",
)


class PasswordDepthError(Exception):
    """Base error for the password depth system."""


class InvalidArgumentError(PasswordDepthError, ValueError):
    """Raised when generation parameters are out of range."""


class EntropySourceError(PasswordDepthError, RuntimeError):
    """Raised when the secure random source cannot deliver bytes."""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 1: SECURE RANDOM SOURCES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RandomSource(Protocol):
    """Narrow capability: cryptographically strong random bytes."""

    def next_bytes(self, n: int) -> bytes:
        """Return n random bytes."""
        ...

    def next_byte(self) -> int:
        """Return one random byte as an int in 0..255."""
        ...


class OpenSSLRandomSource:
    """
    Random bytes from OpenSSL's CSPRNG via ``openssl rand``.

    ``openssl rand`` uses RAND_bytes() internally, which reads from the
    OpenSSL DRBG seeded by OS entropy. Every call spawns its own process,
    so a single instance can be shared by concurrent callers.
    """

    name = "openssl"

    def __init__(self, executable="openssl"):
        self.executable = executable

    def next_bytes(self, n: int) -> bytes:
        """Read n bytes from `openssl rand`."""
        if n <= 0:
            return b""
        try:
            result = subprocess.run(
                [self.executable, "rand", str(n)],
                capture_output=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            logger.error(f"openssl rand failed: {e}")
            raise EntropySourceError(f"OpenSSL entropy source unavailable: {e}") from e

        raw_bytes = result.stdout
        if len(raw_bytes) != n:
            raise EntropySourceError(
                f"openssl rand returned {len(raw_bytes)} bytes, expected {n}"
            )
        return raw_bytes

    def next_byte(self) -> int:
        return self.next_bytes(1)[0]


class UrandomRandomSource:
    """Kernel CSPRNG via os.urandom (thread-safe)."""

    name = "urandom"

    def next_bytes(self, n: int) -> bytes:
        """Read n bytes from the kernel CSPRNG."""
        if n <= 0:
            return b""
        try:
            return os.urandom(n)
        except (NotImplementedError, OSError) as e:
            logger.error(f"os.urandom failed: {e}")
            raise EntropySourceError(f"os.urandom unavailable: {e}") from e

    def next_byte(self) -> int:
        return self.next_bytes(1)[0]


def default_random_source() -> RandomSource:
    """OpenSSL when the binary is on PATH, otherwise the kernel CSPRNG."""
    if shutil.which("openssl"):
        logger.debug("Using OpenSSL entropy source")
        return OpenSSLRandomSource()
    logger.debug("openssl not found on PATH; using os.urandom")
    return UrandomRandomSource()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 2: LAYER TRANSFORMS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransformKind(enum.Enum):
    """Generation layers, keyed by ``layer % 4``."""

    INTERLEAVE_SYMBOLS = 0
    ROTATION = 1
    HASH_SEGMENT = 2
    XOR = 3

    @classmethod
    def for_layer(cls, layer: int) -> "TransformKind":
        """Transform kind for a 1-based generation layer."""
        return cls(layer % 4)


def interleave_with_symbols(password: str, rng: RandomSource) -> str:
    """
    Insert a random symbol after every even-indexed character.

    One random byte is drawn per input character; only the bytes at even
    positions are consumed. Output length is len + ceil(len / 2).
    """
    raw = rng.next_bytes(len(password))
    result = []
    for i, char in enumerate(password):
        result.append(char)
        if i % 2 == 0:
            result.append(SYMBOLS[raw[i] % len(SYMBOLS)])
    return "".join(result)


def apply_rotation(password: str, rng: RandomSource) -> str:
    """Cyclic left rotation by a random offset."""
    byte = rng.next_byte()
    rotation = byte % len(password) if password else 0
    return password[rotation:] + password[:rotation]


def add_hash_segment(password: str, rng: Optional[RandomSource] = None) -> str:
    """
    Append the first 4 hex characters of SHA-256(password).

    Deterministic: the segment is bound to the content, so ``rng`` is
    accepted for a uniform signature but never read.
    """
    digest = hashlib.sha256(password.encode("utf-8", "surrogatepass")).hexdigest()
    return password + digest[:HASH_SEGMENT_LENGTH]


def apply_xor_transform(password: str, rng: RandomSource) -> str:
    """
    XOR every code point with one random key byte.

    The result is a raw code-point sequence: it may contain control or
    otherwise non-printable characters and is returned unchanged.
    """
    key = rng.next_byte()
    return "".join(chr(ord(c) ^ key) for c in password)


TRANSFORMS = {
    TransformKind.INTERLEAVE_SYMBOLS: interleave_with_symbols,
    TransformKind.ROTATION: apply_rotation,
    TransformKind.HASH_SEGMENT: add_hash_segment,
    TransformKind.XOR: apply_xor_transform,
}


def apply_depth_layer(password: str, layer: int, rng: RandomSource) -> str:
    """Apply the transform selected by ``layer % 4``."""
    kind = TransformKind.for_layer(layer)
    logger.debug(f"Applying layer {layer}: {kind.name}")
    return TRANSFORMS[kind](password, rng)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 3: GENERATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def generate_random_base(length: int, rng: RandomSource) -> str:
    """Map one random byte per character onto the 62-char alphanumeric set."""
    raw = rng.next_bytes(length)
    return "".join(ALPHANUMERIC[byte % len(ALPHANUMERIC)] for byte in raw)


def generate_password_with_depth(
    depth: int,
    base_length: int = DEFAULT_BASE_LENGTH,
    rng: Optional[RandomSource] = None,
) -> str:
    """
    Generate a password with ``depth`` layers.

    Layer 1 is the random alphanumeric base; each further layer applies the
    transform selected by ``layer % 4``, in strict numeric order.

    Raises:
        InvalidArgumentError: depth < 1 or base_length < 0.
    """
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise InvalidArgumentError("Depth must be at least 1")
    if isinstance(base_length, bool) or not isinstance(base_length, int) or base_length < 0:
        raise InvalidArgumentError("Base length must be a non-negative integer")

    if rng is None:
        rng = default_random_source()

    password = generate_random_base(base_length, rng)
    for layer in range(1, depth):
        password = apply_depth_layer(password, layer, rng)

    logger.debug(
        f"Generated password: depth={depth}, base_length={base_length}, "
        f"final_length={len(password)}"
    )
    return password


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 4: LAYER DETECTION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _is_ascii_alnum(c: str) -> bool:
    """Base64 alphabet letters and digits only; non-ASCII alnum is excluded."""
    return c.isascii() and c.isalnum()


def has_base_layer(password: str) -> bool:
    """Any non-empty password has a base layer."""
    return bool(password)


def has_character_diversity(password: str) -> bool:
    """True when at least 2 of: uppercase, lowercase, digit, symbol."""
    classes_used = set()
    for c in password:
        if "A" <= c <= "Z":
            classes_used.add("uppercase")
        elif "a" <= c <= "z":
            classes_used.add("lowercase")
        elif "0" <= c <= "9":
            classes_used.add("digits")
        else:
            classes_used.add("symbols")
    return len(classes_used) >= 2


def has_positional_randomness(password: str) -> bool:
    """
    Detect the absence of simple ascending/descending runs.

    Counts adjacent pairs whose code points differ by exactly 1 ("ab", "21")
    and requires that count to stay below half the length.
    """
    if len(password) < MIN_POSITIONAL_LENGTH:
        return False

    sequential_count = sum(
        1
        for i in range(len(password) - 1)
        if abs(ord(password[i]) - ord(password[i + 1])) == 1
    )
    return sequential_count < len(password) // 2


def has_encoding_pattern(password: str) -> bool:
    """Interleave symbols present, or the string looks like base64."""
    if any(c in SYMBOLS for c in password):
        return True
    return len(password) % 4 == 0 and all(
        _is_ascii_alnum(c) or c in BASE64_EXTRA for c in password
    )


def has_cryptographic_depth(password: str) -> bool:
    """More than half of a password of length >= 8 is hex digits."""
    if len(password) < MIN_CRYPTO_LENGTH:
        return False
    hex_char_count = sum(1 for c in password if c in HEX_DIGITS)
    return hex_char_count * 2 > len(password)


class LayerSignature(enum.Enum):
    """Detected layers, in evaluation order."""

    BASE = "Base random layer"
    CHARACTER_DIVERSITY = "Character diversity layer"
    POSITIONAL_RANDOMNESS = "Positional randomness layer"
    ENCODING_PATTERN = "Encoding pattern layer"
    CRYPTOGRAPHIC_DEPTH = "Cryptographic depth layer"

    def detect(self, password: str) -> bool:
        """Run this signature's predicate."""
        return DETECTORS[self](password)


DETECTORS = {
    LayerSignature.BASE: has_base_layer,
    LayerSignature.CHARACTER_DIVERSITY: has_character_diversity,
    LayerSignature.POSITIONAL_RANDOMNESS: has_positional_randomness,
    LayerSignature.ENCODING_PATTERN: has_encoding_pattern,
    LayerSignature.CRYPTOGRAPHIC_DEPTH: has_cryptographic_depth,
}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 5: ANALYSIS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class PasswordDepthAnalysis:
    """Result of a depth analysis. Immutable; compared by value."""

    depth: int
    layers: Tuple[str, ...]
    description: str
    strength: str

    @classmethod
    def empty(cls) -> "PasswordDepthAnalysis":
        """The degenerate analysis for an empty or missing password."""
        return cls(depth=0, layers=(), description=EMPTY_DESCRIPTION, strength=NO_STRENGTH)

    def __post_init__(self):
        object.__setattr__(self, "layers", tuple(self.layers))
        if self.depth != len(self.layers):
            raise ValueError(
                f"depth {self.depth} does not match {len(self.layers)} layers"
            )

    def to_dict(self) -> dict:
        """JSON-serializable form."""
        return {
            "depth": self.depth,
            "layers": list(self.layers),
            "description": self.description,
            "strength": self.strength,
        }

    def __str__(self):
        """Same text as format_analysis."""
        return format_analysis(self)


def calculate_strength(depth: int) -> str:
    """Map a depth onto its strength label."""
    if depth >= 5:
        return MAX_STRENGTH
    return STRENGTH_LABELS.get(depth, UNKNOWN_STRENGTH)


def analyze_password_depth(password: Optional[str]) -> PasswordDepthAnalysis:
    """
    Run every layer signature against ``password`` and score the result.

    Empty or None input yields depth 0 with strength "None". Never raises.
    """
    if not password:
        return PasswordDepthAnalysis.empty()

    detected_layers = [
        signature.value for signature in LayerSignature if signature.detect(password)
    ]
    depth = len(detected_layers)

    return PasswordDepthAnalysis(
        depth=depth,
        layers=tuple(detected_layers),
        description=f"Password has {depth} layers of depth",
        strength=calculate_strength(depth),
    )


def format_analysis(analysis: PasswordDepthAnalysis) -> str:
    """Render description, strength and detected layers as text."""
    lines = [
        analysis.description,
        f"Strength: {analysis.strength}",
        "Detected Layers:",
    ]
    lines.extend(f"  - {layer}" for layer in analysis.layers)
    return "\n".join(lines)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 6: FACADE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PasswordDepthSystem:
    """Generate, analyze and verify passwords by depth."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else default_random_source()

    def generate(self, depth: int, base_length: int = DEFAULT_BASE_LENGTH) -> str:
        """Generate a password with ``depth`` layers."""
        return generate_password_with_depth(depth, base_length, self.rng)

    def analyze(self, password: Optional[str]) -> PasswordDepthAnalysis:
        """Score ``password`` by detected layers. Never raises."""
        return analyze_password_depth(password)

    def verify(self, password: Optional[str], minimum_depth: int) -> bool:
        """True when the analyzed depth meets ``minimum_depth``."""
        return self.analyze(password).depth >= minimum_depth

    def format_analysis(self, analysis: PasswordDepthAnalysis) -> str:
        """Render an analysis as human-readable text."""
        return format_analysis(analysis)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECTION 7: COMMAND LINE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

ENTROPY_SOURCES = {
    "openssl": OpenSSLRandomSource,
    "urandom": UrandomRandomSource,
}


def header(title):
    """Print a ruled section header."""
    width = 72
    print(f"\n{'━' * width}")
    print(f"  {title}")
    print(f"{'━' * width}")


def displayable(password: str) -> str:
    """XOR layers can emit control characters; escape those for the terminal."""
    if password.isprintable():
        return password
    return ascii(password)


def build_parser() -> argparse.ArgumentParser:
    """Command line: global options plus one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="password-depth",
        description="Generate and analyze passwords by transformation depth.",
    )
    parser.add_argument(
        "--entropy",
        choices=["auto", *ENTROPY_SOURCES],
        default="auto",
        help="random source for generation (default: openssl if available)",
    )
    parser.add_argument("--json", action="store_true", help="emit JSON records")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="generate passwords with a given depth")
    gen.add_argument("--depth", type=int, required=True)
    gen.add_argument("--length", type=int, default=DEFAULT_BASE_LENGTH,
                     help="base length before layers are applied")
    gen.add_argument("--count", type=int, default=1)

    ana = sub.add_parser("analyze", help="analyze password depth")
    ana.add_argument("passwords", nargs="+")

    ver = sub.add_parser("verify", help="check a password against a minimum depth")
    ver.add_argument("password")
    ver.add_argument("--min-depth", type=int, default=DEFAULT_MINIMUM_DEPTH)

    sub.add_parser("demo", help="run the sample generation/analysis report")
    return parser


def _make_system(entropy: str) -> PasswordDepthSystem:
    """Build the facade over the entropy source named on the command line."""
    if entropy == "auto":
        return PasswordDepthSystem()
    return PasswordDepthSystem(ENTROPY_SOURCES[entropy]())


def _cmd_generate(system, args):
    """Print --count passwords of the requested depth."""
    passwords = [system.generate(args.depth, args.length) for _ in range(args.count)]
    if args.json:
        print(json.dumps([
            {"depth": args.depth, "base_length": args.length, "password": p}
            for p in passwords
        ], indent=2))
    else:
        for p in passwords:
            print(displayable(p))
    return 0


def _cmd_analyze(system, args):
    """Print the depth analysis of each password."""
    analyses = [(p, system.analyze(p)) for p in args.passwords]
    if args.json:
        print(json.dumps([
            {"password": p, **a.to_dict()} for p, a in analyses
        ], indent=2))
        return 0
    for p, analysis in analyses:
        print(f"Password: '{p}'")
        print(system.format_analysis(analysis))
        print()
    return 0


def _cmd_verify(system, args):
    """Check one password against --min-depth; exit status 1 when it falls short."""
    passed = system.verify(args.password, args.min_depth)
    analysis = system.analyze(args.password)
    if args.json:
        print(json.dumps({
            "password": args.password,
            "minimum_depth": args.min_depth,
            "depth": analysis.depth,
            "passed": passed,
        }, indent=2))
    else:
        verdict = "✓ PASS" if passed else "✗ FAIL"
        print(f"'{args.password}' - {verdict} (depth {analysis.depth}, "
              f"minimum {args.min_depth})")
    return 0 if passed else 1


def _cmd_demo(system, args):
    """Generate, analyze and verify the sample passwords."""
    report = []

    if not args.json:
        print("╔" + "═" * 70 + "╗")
        print("║  PASSWORD DEPTH SYSTEM" + " " * 47 + "║")
        print("╚" + "═" * 70 + "╝")
        print(f"\n  Entropy source: {getattr(system.rng, 'name', type(system.rng).__name__)}")
        header("GENERATING PASSWORDS WITH VARYING DEPTHS")
    for depth in range(1, 6):
        password = system.generate(depth, 5)
        report.append({"section": "generate", "depth": depth, "password": password})
        if not args.json:
            print(f"  Depth {depth}: {displayable(password)}")

    if not args.json:
        header("ANALYZING PASSWORD DEPTHS")
    for pwd in SAMPLE_PASSWORDS:
        analysis = system.analyze(pwd)
        report.append({"section": "analyze", "password": pwd, **analysis.to_dict()})
        if not args.json:
            print(f"\n  Password: '{pwd}'")
            for line in system.format_analysis(analysis).splitlines():
                print(f"  {line}")

    if not args.json:
        header(f"VERIFYING DEPTH REQUIREMENTS (minimum depth: {DEFAULT_MINIMUM_DEPTH})")
    for pwd in SAMPLE_PASSWORDS:
        passed = system.verify(pwd, DEFAULT_MINIMUM_DEPTH)
        report.append({"section": "verify", "password": pwd, "passed": passed})
        if not args.json:
            print(f"  '{pwd}' - {'✓ PASS' if passed else '✗ FAIL'}")

    if args.json:
        print(json.dumps(report, indent=2))
    return 0


COMMANDS = {
    "generate": _cmd_generate,
    "analyze": _cmd_analyze,
    "verify": _cmd_verify,
    "demo": _cmd_demo,
}


def main(argv=None):
    """Entry point for the password-depth command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        system = _make_system(args.entropy)
        return COMMANDS[args.command](system, args)
    except InvalidArgumentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except EntropySourceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
