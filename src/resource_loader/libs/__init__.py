"""
Libs Layer - pluggable building blocks.

- loader: the ResourceLoader contract and its two variants
- transport: per-scheme byte delivery (file, http/https, data)
- package: package: URI resolution
"""
