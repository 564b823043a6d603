"""
Test suite for the gpd plugin host.
Covers loading, contract validation, registration, configs and the host CLI.
"""
