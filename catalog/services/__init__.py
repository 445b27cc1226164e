"""
Services Package

Catalog logic kept separate from HTTP handling (routers):

- repository.py: Persistence gateway (find, count, insert, replace, remove)
- aggregate.py: Runs independent queries concurrently and joins the results
- outcomes.py: Result values returned by every workflow
- catalog.py: Home page counts
- books.py, bookinstances.py, authors.py, genres.py: list, detail, create,
  update and delete workflows for each resource
"""
