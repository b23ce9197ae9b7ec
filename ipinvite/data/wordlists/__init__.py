"""
Bundled word dictionaries, one words_{id}.txt per dictionary id
"""
