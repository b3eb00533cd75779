"""Static accounting policy text attached to every set of statements."""
from typing import List

from .models import AccountingPolicy, TableContent

ACCOUNTING_POLICIES: List[AccountingPolicy] = [
    AccountingPolicy(
        title="1. General Information",
        text=[
            "The Company is engaged in the manufacturing of industrial automation systems and trading of related "
            "products and customer services activities in India. It also provides certain technical services overseas.",
        ],
    ),
    AccountingPolicy(
        title="2. Summary of material accounting policies",
        text=[
            "a) Statement of compliance",
            "These financial statements have been prepared in accordance with Indian Accounting Standards (\"Ind AS\") "
            "notified under the Companies (Indian Accounting Standards) Rules, 2015 and relevant amendment rules "
            "issued thereafter.",
            "b) Basis of accounting and presentation",
            "The financial statements have been prepared on the historical cost basis except for certain financial "
            "instruments that are measured at fair values at the end of each reporting period.",
            "All amounts are presented in Indian Rupees in lakhs, rounded to two decimals, unless otherwise stated.",
            "c) Property, plant and equipment",
            "Property, plant and equipment are stated at cost, less accumulated depreciation and impairment, if any. "
            "The Company depreciates property, plant and equipment over their estimated useful lives using the "
            "straight-line method. The estimated useful lives of assets are as follows:",
            TableContent(
                headers=["", "Useful lives (in years)"],
                rows=[
                    ["Building", "30 to 60"],
                    ["Vehicles*", "6"],
                    ["Plant and Machinery*", "5 to 15"],
                    ["Furniture and fixtures and office equipment's*", "2 to 10"],
                ],
            ),
            "Leasehold improvements are amortised over the duration of the lease.",
            "Assets costing less than ₹ 10,000 each are fully depreciated in the year of capitalisation.",
            "* Based on an internal assessment, management believes that the useful lives given above represent the "
            "period over which it expects to use the assets.",
            "d) Intangible assets",
            "Intangible assets are carried at cost less accumulated amortisation and impairment, and are amortised "
            "over their estimated useful life as follows:",
            TableContent(
                headers=["Asset Category", "Useful lives (in years)"],
                rows=[["Computer Software", "3"]],
            ),
            "e) Inventories",
            "Inventories are valued at the lower of cost on weighted average basis and net realisable value after "
            "providing for obsolescence and other losses, where considered necessary.",
            "f) Revenue recognition",
            "The Company applies Ind AS 115 \"Revenue from Contracts with Customers\" and recognises revenue when it "
            "satisfies a performance obligation by transferring promised goods or services to a customer.",
            "g) Provisions",
            "Provisions are recognised when the Company has a present obligation as a result of a past event, it is "
            "probable that an outflow of resources will be required to settle the obligation and a reliable estimate "
            "can be made of the amount of the obligation.",
        ],
    ),
]


def accounting_policies() -> List[AccountingPolicy]:
    return [policy.model_copy(deep=True) for policy in ACCOUNTING_POLICIES]
