"""MIPS32 execution-trace statistics."""
