#!/usr/bin/env python3
"""
QR Style Studio

Features
- Content field with a non-empty fallback
- Dot / background colors, optional linear or radial gradient
- Dot, corner-square and corner-dot shapes, error-correction level
- Embedded logo with size and margin
- Low-contrast warning
- One-click PrintScribe branding preset
- Export PNG/SVG; shortcuts Ctrl+S (PNG), Esc (clear content)
"""

from qrstyle.ui.tk_app import main

if __name__ == "__main__":
    main()
