# Parameters for hashtree roots, proofs and commitments

# Digest size of the tree hash (SHA-256)
HASH_SIZE = 32

# Proof wire format
PROOF_TAG_LEFT = 0
PROOF_TAG_RIGHT = 1
PROOF_STEP_SIZE = 1 + HASH_SIZE
PROOF_COUNT_SIZE = 2
MAX_PROOF_LENGTH = 256

# Commitments
COMMITMENT_VERSION = 1
PUBLIC_KEY_SIZE = 32

# CLI
DEFAULT_LOG_LEVEL = "WARNING"
