"""Smart cleanup tool for merged git branches.

Features:
- List local branches already merged into the current branch
- Annotate each branch with the age of its last commit
- Filter branches by age and protect important branch names
- Interactive selection and dry-run preview before deletion
"""

__version__ = "1.1.0"
