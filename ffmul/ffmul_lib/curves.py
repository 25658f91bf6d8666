"""Field-order constants of the curves the witness generator targets."""

####################################
# NIST P-256
####################################

P256_BASE_INT = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF

####################################
# BN254 (alt_bn128)
####################################

BN254_BASE_INT = 21888242871839275222246405745257275088696311157297823662689037894645226208583
BN254_SCALAR_INT = 21888242871839275222246405745257275088548364400416034343698204186575808495617

####################################
# BLS12-377
####################################

BLS12_377_BASE_INT = 0x01AE3A4617C510EAC63B05C06CA1493B1A22D9F300F5138F1EF3622FBA094800170B5D44300000008508C00000000001

####################################
# secp256k1 / ed25519
####################################

SECP256K1_BASE_INT = 2**256 - 2**32 - 977
ED25519_BASE_INT = 2**255 - 19


FIELDS = {
    "p256_base": P256_BASE_INT,
    "bn254_base": BN254_BASE_INT,
    "bn254_scalar": BN254_SCALAR_INT,
    "bls12_377_base": BLS12_377_BASE_INT,
    "secp256k1_base": SECP256K1_BASE_INT,
    "ed25519_base": ED25519_BASE_INT,
}
