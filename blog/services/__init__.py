"""Post services.

- codec: Post <-> stored bytes
- posts: repository owning the id counter, recency index and link map

Services receive their store explicitly and are called by routes.
"""
