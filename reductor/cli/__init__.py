"""
reductor CLI

Commands:
- reductor check - Validate reducers against their action creators
- reductor generate - Render generated dispatchers and builders
- reductor version - Show version information
"""
