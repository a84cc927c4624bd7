"""Rule selection and composition for file-scoped guidance documents."""
