"""Chat app package: direct conversations between guests and hosts."""
