"""
nftkit: declarative nftables batch builder.

Assemble add/delete/flush/insert/replace/rename commands against tables, chains,
rules, sets, maps, elements, counters, quotas, limits and flowtables, with the
current table/chain/collection tracked for you, then hand the batch to a
submitter in one atomic `nft -j -f -` transaction.

Layers (import the one you need; this package root imports nothing)
- nftkit.core: grammar, errors, kind registry, classifier, context, factory, batch.
- nftkit.expr: fluent rule-body builder.
- nftkit.submit: submitters, results and settings.
- nftkit.builder: the Builder session facade.

Import DAG discipline
- core <- expr <- builder, core <- submit <- builder. core never imports upward.
"""

__version__ = "0.1.0"
