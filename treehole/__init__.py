"""Feed viewer for the treehole anonymous message board."""
