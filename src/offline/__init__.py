"""Load playbooks and component descriptors from disk to replay a build offline."""
