"""Host adapters embedding jump_motion in concrete UI toolkits."""
