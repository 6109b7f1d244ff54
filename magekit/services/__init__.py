"""
Services for magekit.

- execution/: process spawning, output streaming, cancellation
- tools/: option-to-argument runners for go, helm and ko
- logging: ILogger implementations
"""
