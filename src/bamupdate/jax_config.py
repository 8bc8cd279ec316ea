"""
JAX Configuration - MUST be imported before any JAX imports.

This module sets environment variables for JAX configuration including:
- Double precision (log-likelihood ratios are compared against log(u))
- XLA C++ log verbosity
- Persistent compilation cache directory for the jitted log densities
"""
import os
from pathlib import Path

# --- PRECISION ---
# Parameter buffers are float64 numpy arrays; keep JAX draws in the same precision
os.environ.setdefault("JAX_ENABLE_X64", "1")

# --- LOGGING ---
os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")

# --- PERSISTENT COMPILATION CACHE ---
_JAX_CACHE_DIR = Path.home() / ".cache" / "jax" / "bamupdate_cache"
os.environ.setdefault("JAX_COMPILATION_CACHE_DIR", str(_JAX_CACHE_DIR))
os.environ.setdefault("JAX_PERSISTENT_CACHE_MIN_COMPILE_TIME_SECS", "1.0")
