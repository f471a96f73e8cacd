"""Playlist service: owner-scoped playlists of catalogue tracks."""
