# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""DashLens backend: local credentials, session state and earnings schema."""

__version__ = "0.1.0"
