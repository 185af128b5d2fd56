"""
Mock company data.

The application has no persistence: every session starts from this
snapshot of a small company called Nexus.
"""

from nexus_manager.models import BusinessData


_INITIAL_DATA = {
    "chart_of_accounts": [
        {"code": "1000", "name": "Cash on Hand", "type": "Asset"},
        {"code": "1100", "name": "Accounts Receivable", "type": "Asset"},
        {"code": "1200", "name": "Inventory", "type": "Asset"},
        {"code": "1500", "name": "Furniture & Fixtures", "type": "Asset"},
        {"code": "2000", "name": "Accounts Payable", "type": "Liability"},
        {"code": "2100", "name": "Credit Card", "type": "Liability"},
        {"code": "2500", "name": "Bank Loan", "type": "Liability"},
        {"code": "3000", "name": "Owner Equity", "type": "Equity"},
        {"code": "4000", "name": "Sales Revenue", "type": "Revenue"},
        {"code": "4100", "name": "Service Revenue", "type": "Revenue"},
        {"code": "5000", "name": "Cost of Goods Sold", "type": "Expense"},
        {"code": "6000", "name": "Payroll Expense", "type": "Expense"},
        {"code": "6100", "name": "Rent Expense", "type": "Expense"},
        {"code": "6200", "name": "Utilities", "type": "Expense"},
        {"code": "6300", "name": "Software & IT", "type": "Expense"},
    ],
    "assets": [
        {"id": "1", "name": "Office HQ", "value": 1200000, "type": "Fixed Asset",
         "date_acquired": "2020-01-15", "depreciation_rate": 2.5},
        {"id": "2", "name": "Company Fleet", "value": 150000, "type": "Fixed Asset",
         "date_acquired": "2021-06-20", "depreciation_rate": 15},
        {"id": "3", "name": "Cash Reserves", "value": 450000, "type": "Current Asset",
         "date_acquired": "2023-01-01"},
        {"id": "4", "name": "Software IP", "value": 800000, "type": "Intangible Asset",
         "date_acquired": "2019-11-30"},
    ],
    "liabilities": [
        {"id": "1", "name": "Mortgage", "amount": 950000, "type": "Long-Term Liability",
         "due_date": "2035-01-15", "interest_rate": 4.5},
        {"id": "2", "name": "Q4 Taxes", "amount": 45000, "type": "Current Liability",
         "due_date": "2023-12-15"},
    ],
    "transactions": [
        {"id": "101", "date": "2023-10-01", "description": "Client Payment - Project Alpha",
         "category": "Sales Revenue", "amount": 15000, "type": "Income"},
        {"id": "102", "date": "2023-10-05", "description": "Office Rent",
         "category": "Rent Expense", "amount": 4000, "type": "Expense"},
        {"id": "103", "date": "2023-10-10", "description": "Consulting Services",
         "category": "Service Revenue", "amount": 8500, "type": "Income"},
        {"id": "104", "date": "2023-10-15", "description": "Server Hosting Costs",
         "category": "Software & IT", "amount": 1200, "type": "Expense"},
        {"id": "105", "date": "2023-10-28", "description": "Employee Payroll",
         "category": "Payroll Expense", "amount": 12000, "type": "Expense"},
    ],
    "invoices": [
        {
            "id": "INV-2023-001", "client_name": "Acme Corp", "date": "2023-11-01",
            "due_date": "2023-11-30", "status": "Sent", "total_amount": 5000,
            "items": [{"description": "Web Development", "quantity": 1, "unit_price": 5000}],
        },
        {
            "id": "INV-2023-002", "client_name": "Globex Inc", "date": "2023-10-15",
            "due_date": "2023-11-15", "status": "Overdue", "total_amount": 2500,
            "items": [{"description": "Maintenance Retainer", "quantity": 1, "unit_price": 2500}],
        },
    ],
    "bills": [
        {"id": "BILL-001", "vendor_name": "AWS Services", "invoice_number": "AWS-8821",
         "date": "2023-11-01", "due_date": "2023-11-10", "amount": "850.00",
         "category": "Software & IT", "status": "Pending"},
        {"id": "BILL-002", "vendor_name": "CleanCo Facilities", "invoice_number": "CLN-992",
         "date": "2023-11-05", "due_date": "2023-11-20", "amount": "300.00",
         "category": "Utilities", "status": "Received"},
    ],
    "employees": [
        {"id": "1", "name": "Sarah Connor", "role": "CEO", "department": "Executive",
         "email": "sarah@nexus.com", "start_date": "2018-05-01", "status": "Active",
         "credentials": ["MBA", "PMP"]},
        {"id": "2", "name": "John Doe", "role": "Lead Accountant", "department": "Finance",
         "email": "john@nexus.com", "start_date": "2020-03-12", "status": "Active",
         "credentials": ["CPA"]},
        {"id": "3", "name": "Mike Ross", "role": "General Technician", "department": "IT Support",
         "email": "mike@nexus.com", "start_date": "2022-08-15", "status": "Active",
         "credentials": ["CompTIA A+"]},
    ],
    "candidates": [
        {"id": "1", "name": "Alice Smith", "applying_for": "Senior Frontend Engineer", "stage": "Interview"},
        {"id": "2", "name": "Bob Johnson", "applying_for": "Backend Developer", "stage": "Applied"},
        {"id": "3", "name": "Charlie Davis", "applying_for": "On-Site Technician", "stage": "Offer"},
        {"id": "4", "name": "Diana Prince", "applying_for": "Mechanical Engineer", "stage": "Applied"},
    ],
    "job_proformas": [
        {
            "id": "1",
            "title": "Senior Frontend Engineer",
            "department": "Engineering",
            "salary_range": "$120k-$150k",
            "description": "Lead our React dashboard team and architect scalable frontend solutions.",
            "requirements": ["5+ years React", "TypeScript Mastery", "State Management (Redux/Zustand)"],
        },
        {
            "id": "2",
            "title": "Frontend Developer",
            "department": "Engineering",
            "salary_range": "$80k-$110k",
            "description": "Develop user-facing features and ensure high performance of web applications.",
            "requirements": ["3+ years Experience", "React.js", "CSS/Tailwind", "Responsive Design"],
        },
        {
            "id": "3",
            "title": "Backend Developer",
            "department": "Engineering",
            "salary_range": "$90k-$120k",
            "description": "Build robust server-side logic, manage databases, and design APIs.",
            "requirements": ["Node.js or Python", "SQL & NoSQL Databases", "REST/GraphQL APIs"],
        },
        {
            "id": "4",
            "title": "QA Tester",
            "department": "Quality Assurance",
            "salary_range": "$60k-$85k",
            "description": "Execute manual and automated tests to ensure software quality before release.",
            "requirements": ["Attention to Detail", "Selenium/Cypress", "JIRA", "Regression Testing"],
        },
        {
            "id": "5",
            "title": "IT Technician",
            "department": "IT Support",
            "salary_range": "$50k-$70k",
            "description": "Provide level 1-2 support for internal employees, troubleshooting hardware and software.",
            "requirements": ["Hardware Troubleshooting", "Networking Basics", "Windows/MacOS Administration"],
        },
        {
            "id": "6",
            "title": "On-Site Technician",
            "department": "Field Operations",
            "salary_range": "$55k-$75k",
            "description": "Travel to client sites to install, maintain, and repair company equipment.",
            "requirements": ["Valid Driver License", "Field Repair Experience", "Physical Stamina",
                             "Client Communication"],
        },
        {
            "id": "7",
            "title": "Mechanical Engineer",
            "department": "Mechanical Dept",
            "salary_range": "$85k-$115k",
            "description": "Design, analyze, and oversee the manufacturing of mechanical systems.",
            "requirements": ["BS in Mechanical Engineering", "CAD (SolidWorks/AutoCAD)", "Thermodynamics",
                             "Prototyping"],
        },
    ],
}


def initial_business_data() -> BusinessData:
    """Return a fresh, independently mutable copy of the mock company."""
    return BusinessData.model_validate(_INITIAL_DATA)
