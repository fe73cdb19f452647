"""HTTP API for template browsing, previews and exports."""
