"""HTTP portal for fsbridge."""
