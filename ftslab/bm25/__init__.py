"""Configuration loading and validation for BM25 scoring experiments."""