"""Keycodes, input state, key name mapping and trigger dispatch."""