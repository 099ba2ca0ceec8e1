"""stackprobe: remote repository stack inference."""
