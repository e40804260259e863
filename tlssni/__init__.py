"""Read the SNI hostname from a TLS ClientHello; string hashes, merge sort and an ordered hash table."""

__version__ = "0.1.0"
__all__ = ["tls", "hashing", "mixhash", "mergesort", "hashtable"]