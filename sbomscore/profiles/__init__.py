"""Compliance profile checks: Interlynk, NTIA (2021 and 2025), BSI TR-03183-2, OpenChain Telco and FSCT."""
