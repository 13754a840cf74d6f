"""
Kronos - gossip-clustered job scheduler node components.
"""
