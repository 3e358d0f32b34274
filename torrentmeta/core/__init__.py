"""Core bencode codec, torrent mapping and info hash calculation."""
