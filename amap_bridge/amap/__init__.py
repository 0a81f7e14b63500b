"""Amap REST adapter: envelopes, endpoints, normalizers and the tool registry."""
