"""
Candy Machine Configuration Package Initialization

This package turns a human-authored Candy Machine configuration document into
the strictly typed arguments the Candy Machine program's instructions expect.
It converts SOL prices to lamports, RFC 3339 go-live dates to epoch seconds
and base58 strings to 32-byte public keys, and fails fast on the first
invalid field.

The package includes:
- Primitive codecs for addresses, currency, timestamps and fixed-width bytes
- Pydantic models for the configuration document and its settings groups
- The schema bridge to the program's types
- Custom error handling
- MCP server implementation exposing validation and translation as tools
"""
