"""Static lookup tables used to build prompts and fill in missing code.

All tables are read-only mappings so request handling can never mutate them.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

DEFAULT_COMPANIES = "top Indian IT companies"

ROLE_COMPANIES: Mapping[str, str] = MappingProxyType({
    # senior
    "Software Engineer": "Google India, Microsoft India, Amazon India, Adobe India",
    "Full Stack Developer": "Flipkart, Paytm, Zomato, Swiggy, MakeMyTrip",
    "Backend Python Developer": "Amazon India, Flipkart, Zomato, Swiggy, Ola",
    "Python Developer": "TCS, Infosys, Wipro, HCL, Accenture, Tech Mahindra",
    "React.js Developer": "Flipkart, Swiggy, Zomato, PhonePe, Myntra",
    "Node.js Developer": "Paytm, Flipkart, Zomato, Swiggy, Ola",
    "DevOps Engineer": "Amazon India, Microsoft India, Flipkart, Paytm",
    "AWS DevOps Engineer": "Amazon India, Flipkart, Paytm, Zomato, Swiggy",
    "Cloud Developer": "Amazon India, Microsoft India, Google India, IBM India",
    "MERN Stack Developer": "Flipkart, Paytm, Zomato, Swiggy, MakeMyTrip",
    "Java Developer": "TCS, Infosys, Wipro, HCL, Tech Mahindra, Oracle",
    "Front-end Developer": "Flipkart, Paytm, Myntra, Zomato, Amazon India",
    "Back-end Developer": "Amazon India, Flipkart, Google India, Microsoft India",
    "Blockchain Developer": "WazirX, CoinDCX, Polygon, Zebpay, BitBNS",
    "Salesforce Developer": "TCS, Infosys, Accenture, Wipro, Deloitte",
    "Software Developer": "TCS, Infosys, Wipro, HCL, Tech Mahindra",
    # junior / entry level
    "Associate Software Engineer": "TCS, Infosys, Wipro, HCL, Tech Mahindra",
    "Junior Front-End Developer": "Flipkart, Paytm, Zomato, Swiggy, MakeMyTrip",
    "Junior Back-End Developer": "Amazon India, Flipkart, Google India, Microsoft India",
    "Full-Stack Developer Intern": "Flipkart, Paytm, Zomato, Swiggy, Amazon India",
    "Software Developer Trainee": "TCS, Infosys, Wipro, HCL, Accenture",
    "Mobile App Developer (Trainee)": "Flipkart, Paytm, Ola, Uber India, MakeMyTrip",
    "Cloud Support Associate": "Amazon India, Microsoft India, Google India, IBM India",
    "IT Support Engineer": "TCS, Infosys, Wipro, HCL, Tech Mahindra",
    "QA/Test Engineer": "TCS, Infosys, Wipro, Amazon India, Flipkart",
    "Technical Support Executive": "Amazon India, Flipkart, Microsoft India, Google India",
    "Web Developer Intern": "TCS, Infosys, Wipro, Flipkart, Paytm",
    "Application Support Engineer": "TCS, Infosys, Wipro, HCL, Accenture",
    "Graduate Engineer Trainee": "TCS, Infosys, Wipro, HCL, Tech Mahindra",
})

DIFFICULTY_GUIDELINES: Mapping[str, str] = MappingProxyType({
    "easy": "Basic implementation problems, simple algorithms, straightforward logic. Suitable for 0-2 years experience.",
    "medium": "Moderate complexity, requires good understanding of data structures and algorithms. Suitable for 2-5 years experience.",
    "hard": "Complex problems requiring advanced algorithmic thinking and optimization. Suitable for 5+ years experience.",
})

TOPIC_FOCUS: Mapping[str, str] = MappingProxyType({
    "Arrays": "traversal, prefix sums, in-place updates and subarray problems",
    "Strings": "character counting, pattern matching, palindromes and parsing",
    "Linked Lists": "pointer manipulation, reversal, cycle detection and merging",
    "Stacks": "monotonic stacks, expression evaluation and bracket matching",
    "Queues": "FIFO processing, circular buffers and level-order simulation",
    "Trees": "traversals, depth and diameter, lowest common ancestor",
    "Binary Trees": "recursive traversals, views, path sums and construction",
    "Binary Search Trees": "ordered invariants, insertion, deletion and range queries",
    "Heaps": "priority queues, top-k selection and stream medians",
    "Graphs": "connectivity, shortest paths, cycle detection and topological order",
    "Hash Tables": "frequency maps, lookups, deduplication and grouping",
    "Dynamic Programming": "overlapping subproblems, tabulation and state design",
    "Recursion": "base cases, divide and conquer and recursion trees",
    "Backtracking": "permutations, combinations, pruning and constraint search",
    "Greedy Algorithms": "local choices, interval scheduling and exchange arguments",
    "Sorting Algorithms": "comparison sorts, counting sorts and custom ordering",
    "Searching Algorithms": "linear and binary search and search-space reduction",
    "Two Pointers": "converging pointers, partitioning and pair sums",
    "Sliding Window": "fixed and variable windows over arrays and strings",
    "Binary Search": "search on answers, rotated arrays and boundary finding",
    "Depth First Search": "recursive exploration, components and path enumeration",
    "Breadth First Search": "shortest paths in unweighted graphs and multi-source search",
    "Trie": "prefix queries, word dictionaries and autocomplete",
    "Union Find": "disjoint sets, path compression and dynamic connectivity",
    "Segment Trees": "range queries, point and lazy range updates",
    "Fenwick Tree": "prefix sums with point updates and inversion counting",
})

TOPICS: Tuple[str, ...] = tuple(TOPIC_FOCUS)

LANGUAGES: Mapping[str, str] = MappingProxyType({
    "javascript": "JavaScript",
    "python": "Python",
    "java": "Java",
    "cpp": "C++",
    "csharp": "C#",
    "go": "Go",
    "rust": "Rust",
    "typescript": "TypeScript",
})

MODE_LABELS: Mapping[str, str] = MappingProxyType({
    "implementation": "Complete Implementation",
    "template": "Function Template",
    "problem": "Problem Only",
})

FALLBACK_TEMPLATES: Mapping[str, str] = MappingProxyType({
    "javascript": """/**
 * @param {number[]} nums
 * @return {number}
 */
const removeDuplicates = (nums) => {
    // Your code here
};""",
    "python": '''def remove_duplicates(nums: list[int]) -> int:
    """
    Remove duplicates in-place and return new length
    """
    # Your code here''',
    "java": """class Solution {
    /**
     * @param int[] nums
     * @return int
     */
    public int removeDuplicates(int[] nums) {
        // Your code here
    }
}""",
    "cpp": """int removeDuplicates(vector<int>& nums) {
    // Your code here
}""",
    "csharp": """public class Solution {
    public int RemoveDuplicates(int[] nums) {
        // Your code here
    }
}""",
    "go": """func removeDuplicates(nums []int) int {
    // Your code here
    return 0
}""",
    "rust": """fn remove_duplicates(nums: &mut Vec<i32>) -> i32 {
    // Your code here
}""",
    "typescript": """/**
 * @param {number[]} nums
 * @return {number}
 */
const removeDuplicates = (nums: number[]): number => {
    // Your code here
};""",
})

def companies_for(role: str) -> str:
    return ROLE_COMPANIES.get((role or "").strip(), DEFAULT_COMPANIES)

def fallback_template(language: str) -> str:
    return FALLBACK_TEMPLATES.get(language, f"// Your code here ({language})")
