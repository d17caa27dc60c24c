"""
Ingestion layer — ownership and candidate-pool collaborators.

Submodules:
  sources      — OwnershipSource / CandidateSource protocols
  errors       — OwnershipLookupError / CandidatePoolError
  sui_client   — Sui JSON-RPC ownership source (httpx)
  marketplace  — FixtureMarketplace + FileAssetSource candidate pools

Configuration placement (.env, gitignored):
  TRAIT_AFFINITY_NETWORK   — testnet | devnet | mainnet (default: testnet)
  TRAIT_AFFINITY_RPC_URL   — explicit full-node URL, overrides the network default
"""
