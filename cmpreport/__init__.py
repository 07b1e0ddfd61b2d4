"""Text trees, edit grouping, literals, value trees and reference labels for difference reports."""

__version__ = "0.1.0"
__all__ = ["edits", "literals", "references", "textnode", "valuenode"]