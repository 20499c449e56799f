# === Constants used across modules ===

# Metaplex Token Metadata program (owner of every metadata PDA)
METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
METADATA_SEED = b"metadata"

# Account discriminator for a v1 metadata record (mpl Key::MetadataV1)
METADATA_V1_KEY = 4

# Known stable mints; skipped by the CLI since they are trusted by definition
SOL_MINT  = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
