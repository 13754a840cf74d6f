"""
Cluster topology for kronos nodes.

Submodules:
- membership: Member records and membership events from the gossip layer
- servers: Classification of members into scheduler servers, and the
  lookup of currently known servers

Usage:
    from kronos.cluster.servers import is_server

    ok, parts = is_server(member)
    if ok:
        print(parts.rpc_addr)
"""
